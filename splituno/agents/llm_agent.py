"""LLM agent using OpenAI library with OpenRouter or Groq."""

import json
import os
import re
import time
from typing import Any, List, Optional

from openai import OpenAI

from splituno.engine import (
    ActionPlay,
    DecisionKind,
    DecisionRequest,
    PlayerView,
    make_action,
)

OPENROUTER_BASE = "https://openrouter.ai/api/v1"
GROQ_BASE = "https://api.groq.com/openai/v1"
OLLAMA_BASE = "http://localhost:11434/v1"
HUGGINGFACE_BASE = "https://router.huggingface.co/v1"

RULES = """You are playing Split UNO, a two-deck UNO variant.
Each round every player reveals a number card (0-9) at once: the highest card wins and
sheds it, everyone else draws 1. Ties: the tied players shed, every player draws 1.
A 0 steals a number card from an opponent; a 7 makes an opponent draw 2 number cards and 1 action card.
Round winners may play action cards: BLOCK, REVERSE (swap hands), COLOR (everyone sheds 1),
+2 / +4 (opponent draws), TRUTH, DARE.
Objective: be the first with no number cards left."""

PASS = "pass"


def _format_player_view(pv: PlayerView) -> str:
    """Format player view as text for the LLM."""
    lines = [
        "=== Your hand ===",
        f"{pv.my_number_count} number cards, {pv.my_action_count} action cards",
        f"Consecutive round wins: {pv.consecutive_wins}",
        "",
        "=== Other players ===",
    ]
    for pid, count in pv.number_counts.items():
        if pid != pv.player_id:
            flag = " (blocked next round)" if pv.blocked[pid] else ""
            lines.append(f"  {pid}: {count} number cards, {pv.action_counts[pid]} action cards{flag}")
    lines.extend([
        "",
        "=== Draw piles ===",
        f"number: {pv.number_remaining}, action: {pv.action_remaining}",
        "",
        "=== Game History (last 10 events) ===",
    ])
    if pv.history:
        lines.extend(f"- {h}" for h in pv.history)
    else:
        lines.append("No history yet.")
    return "\n".join(lines)


def _format_options(options: List[Any]) -> str:
    """Format options as an indexed list."""
    return "\n".join(f"{i}: {getattr(o, 'value', o)}" for i, o in enumerate(options))


def _parse_option_response(response: str, options: List[Any]) -> Optional[int]:
    """Parse LLM response into an option index."""
    # 1. A JSON object, possibly with single quotes
    json_match = re.search(r'(\{.*?\})', response, re.DOTALL)
    if json_match:
        json_str = json_match.group(1)
        for candidate in (json_str, json_str.replace("'", '"')):
            try:
                data = json.loads(candidate)
            except (json.JSONDecodeError, ValueError):
                continue
            if isinstance(data, dict) and isinstance(data.get("option_index"), int):
                idx = data["option_index"]
                if 0 <= idx < len(options):
                    return idx
                print(f"[_parse_option_response] Index {idx} out of range (0-{len(options)-1})")
            break

    # 2. "option_index": N with any quoting
    match = re.search(r'["\']?option_index["\']?\s*:\s*(\d+)', response, re.IGNORECASE)
    if match:
        idx = int(match.group(1))
        if 0 <= idx < len(options):
            return idx
        print(f"[_parse_option_response] Index {idx} out of range (0-{len(options)-1}) from regex")

    # 3. Last resort: a standalone number
    cleaned_response = re.sub(r'[{}\[\]"\'.,:]', ' ', response)
    for word in cleaned_response.split():
        if word.isdigit():
            idx = int(word)
            if 0 <= idx < len(options):
                return idx

    return None


class LLMAgent:
    """Agent that uses an LLM to choose among enumerated options."""

    def __init__(
        self,
        provider: str = "openrouter",
        model: str = "openai/gpt-4o-mini",
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        rate_limit: Optional[float] = None,
    ):
        if provider == "openrouter":
            base_url = OPENROUTER_BASE
            key = api_key or os.environ.get("OPENROUTER_API_KEY")
        elif provider == "groq":
            base_url = GROQ_BASE
            key = api_key or os.environ.get("GROQ_API_KEY")
        elif provider == "ollama":
            base_url = os.environ.get("OLLAMA_BASE_URL", OLLAMA_BASE)
            key = "ollama"
        elif provider == "huggingface":
            base_url = HUGGINGFACE_BASE
            key = api_key or os.environ.get("HUGGINGFACE_API_KEY")
        else:
            raise ValueError(f"Unknown provider: {provider}")

        if not key:
            raise ValueError(f"API key required for {provider}. Set {provider.upper()}_API_KEY or pass api_key.")

        self._client = OpenAI(api_key=key, base_url=base_url)
        self._model = model
        self._timeout = timeout
        self._provider = provider
        self._rate_limit = rate_limit  # Requests per minute
        self._request_history: list[float] = []

        print(f"[{self.name}] Initialized with provider={provider}, base_url={base_url}, timeout={timeout}s, rate_limit={rate_limit or 'None'} rpm")

    @property
    def name(self) -> str:
        return f"llm-{self._model}"

    def _wait_for_rate_limit(self) -> None:
        """Block if rate limit is exceeded."""
        if not self._rate_limit:
            return

        now = time.time()
        self._request_history = [t for t in self._request_history if now - t < 60.0]

        if len(self._request_history) >= self._rate_limit:
            oldest = self._request_history[0]
            wait_time = 60.0 - (now - oldest)
            if wait_time > 0:
                print(f"[{self.name}] Rate limit reached ({len(self._request_history)}/{self._rate_limit} rpm). Waiting {wait_time:.2f}s...")
                time.sleep(wait_time)

        self._request_history.append(time.time())

    def _pick(self, player_view: PlayerView, question: str, options: List[Any]) -> int:
        """Ask the model to pick one option; fall back to the first after retries."""
        prompt = f"""{RULES}

{_format_player_view(player_view)}

=== Question ===
{question}

=== Options ===
{_format_options(options)}

INSTRUCTIONS:
Select the option most likely to win the game.
Respond with a JSON object containing the index of your chosen option.
Example: {{"option_index": 1}}
"""

        for attempt in range(1, 4):
            start_time = time.time()
            try:
                self._wait_for_rate_limit()

                kwargs = {
                    "model": self._model,
                    "messages": [{"role": "user", "content": prompt}],
                    "timeout": self._timeout,
                }
                if "gpt-4" in self._model or "gpt-3.5" in self._model or "groq" in self._provider:
                    kwargs["response_format"] = {"type": "json_object"}

                print(f"[{self.name}] Attempt {attempt}: Sending request to {self._provider} (timeout={self._timeout}s)...")
                resp = self._client.chat.completions.create(**kwargs)

                duration = time.time() - start_time
                content = resp.choices[0].message.content or ""
                print(f"[{self.name}] Received response in {duration:.2f}s")

                idx = _parse_option_response(content, options)
                if idx is not None:
                    return idx

                print(f"[{self.name}] Failed to parse option from response:")
                print("-" * 40)
                print(content)
                print("-" * 40)
            except Exception as e:
                duration = time.time() - start_time
                print(f"[{self.name}] Error on attempt {attempt} after {duration:.2f}s: {type(e).__name__}: {e}")

        print(f"[{self.name}] All retries failed. Defaulting to first option.")
        return 0

    def choose_number(self, player_view: PlayerView, player_id: str) -> int:
        options = list(range(10))
        return options[self._pick(player_view, "Which number card do you reveal this round?", options)]

    def choose_action(self, player_view: PlayerView, player_id: str) -> Optional[ActionPlay]:
        if player_view.my_action_count == 0:
            return None
        options = [PASS, "block", "reverse", "color_change", "draw_two", "draw_four", "truth", "dare"]
        choice = options[self._pick(
            player_view, "You won the round. Play an action card, or pass?", options
        )]
        if choice == PASS:
            return None
        return make_action(choice)

    def decide(self, player_view: PlayerView, request: DecisionRequest) -> Any:
        options = request.options
        if request.kind == DecisionKind.YES_NO:
            options = ["yes", "no"]
        idx = self._pick(player_view, request.prompt, options)
        if request.kind == DecisionKind.YES_NO:
            return idx == 0
        return request.options[idx]
