"""
Generative backends for draft generation.

An LLMProvider turns a system prompt and a user prompt into a completion.
Every request runs within a RequestBudget: at most `max_attempts` calls,
exponential backoff between them on the provider's transient errors, and a
wall-clock `timeout` covering the calls and the waits together. The time
left in the budget is passed to each call as its HTTP timeout, and the SDK
clients' own retries are disabled, so a request never outlives its budget.

get_provider() reports every reason a backend cannot be built (missing
SDK, missing API key, unknown provider name, bad budget settings) as a
single BackendUnavailableError. Provider SDKs are optional; install them
with the `llm` extra.
"""

import importlib
import os
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import partial
from types import ModuleType
from typing import Callable, Dict, Optional, Tuple, Type, TypeVar

from dotenv import load_dotenv
from loguru import logger

from docsmith.exceptions import BackendUnavailableError

load_dotenv()

# Completion budget for a full document draft
MAX_TOKENS = 4096

T = TypeVar("T")


@dataclass(frozen=True)
class RequestBudget:
    """
    Limits for one backend request, retries included.

    Attributes:
        max_attempts: Calls made before giving up (1 disables retries)
        base_delay: Wait before the first retry; doubles on each further retry
        timeout: Wall-clock seconds for the whole request
    """

    max_attempts: int = 3
    base_delay: float = 1.0
    timeout: float = 120.0

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.base_delay < 0:
            raise ValueError(f"base_delay must not be negative, got {self.base_delay}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(cls) -> "RequestBudget":
        """Read LLM_MAX_ATTEMPTS, LLM_RETRY_DELAY and LLM_TIMEOUT, keeping defaults for unset ones."""
        defaults = cls()
        return cls(
            max_attempts=int(os.getenv("LLM_MAX_ATTEMPTS", defaults.max_attempts)),
            base_delay=float(os.getenv("LLM_RETRY_DELAY", defaults.base_delay)),
            timeout=float(os.getenv("LLM_TIMEOUT", defaults.timeout)),
        )

    def delay_before(self, attempt: int) -> float:
        """Wait before retry number `attempt` (1-based)."""
        return self.base_delay * (2 ** (attempt - 1))


def call_within_budget(
    operation: Callable[[float], T],
    transient_errors: Tuple[Type[Exception], ...],
    budget: RequestBudget,
    label: str,
) -> T:
    """
    Call operation until it succeeds or the budget is spent.

    Only transient errors are retried; anything else propagates at once.
    A retry is skipped when its wait would end past the deadline, and the
    last transient error is re-raised.

    Args:
        operation: Performs one call; receives the seconds left in the budget
        transient_errors: Exception types worth retrying
        budget: Attempt, backoff and timeout limits
        label: Backend name for log messages

    Returns:
        Result of the first successful call
    """
    deadline = time.monotonic() + budget.timeout

    for attempt in range(1, budget.max_attempts + 1):
        remaining = deadline - time.monotonic()
        try:
            return operation(remaining)
        except transient_errors as e:
            if attempt == budget.max_attempts:
                logger.warning(f"[llm] {label}: giving up after {attempt} attempt(s)")
                raise

            delay = budget.delay_before(attempt)
            if time.monotonic() + delay >= deadline:
                logger.warning(f"[llm] {label}: {budget.timeout:.0f}s budget spent, giving up")
                raise

            logger.warning(
                f"[llm] {label}: {type(e).__name__}, retrying in {delay:.1f}s "
                f"(attempt {attempt}/{budget.max_attempts})"
            )
            time.sleep(delay)


@dataclass
class LLMResponse:
    """Response from an LLM provider."""

    content: str
    model: str
    input_tokens: int
    output_tokens: int


class LLMProvider(ABC):
    """
    Abstract base for generative backends.

    Subclasses set `vendor`, `model` and `transient_errors`, optionally a
    `budget`, and implement _complete() for a single call.
    """

    vendor: str
    model: str
    transient_errors: Tuple[Type[Exception], ...] = ()
    budget: RequestBudget = RequestBudget()

    @property
    def name(self) -> str:
        return f"{self.vendor}/{self.model}"

    @abstractmethod
    def _complete(self, system_prompt: str, user_prompt: str, timeout: float) -> LLMResponse:
        """Make a single call (no retries) that gives up after timeout seconds."""

    def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Generate a completion, retrying transient errors within the budget."""
        return call_within_budget(
            partial(self._complete, system_prompt, user_prompt),
            self.transient_errors,
            self.budget,
            self.name,
        )


def _import_sdk(module_name: str) -> ModuleType:
    # SDKs are heavy and optional; import only when a provider is built
    try:
        return importlib.import_module(module_name)
    except ImportError as e:
        raise BackendUnavailableError(
            f"{module_name} package required. Install with: pip install 'docsmith[llm]'"
        ) from e


def _api_key(env_var: str) -> str:
    api_key = os.getenv(env_var)
    if not api_key:
        raise BackendUnavailableError(f"{env_var} environment variable not set")
    return api_key


class AnthropicProvider(LLMProvider):
    """Anthropic Claude backend."""

    vendor = "anthropic"
    default_model = "claude-sonnet-4-20250514"

    def __init__(self, model: Optional[str] = None, budget: Optional[RequestBudget] = None):
        anthropic = _import_sdk("anthropic")
        self.model = model or self.default_model
        self.budget = budget or RequestBudget()
        self.client = anthropic.Anthropic(
            api_key=_api_key("ANTHROPIC_API_KEY"),
            timeout=self.budget.timeout,
            max_retries=0,
        )
        self.transient_errors = (anthropic.RateLimitError, anthropic.APIConnectionError)

    def _complete(self, system_prompt: str, user_prompt: str, timeout: float) -> LLMResponse:
        response = self.client.messages.create(
            model=self.model,
            max_tokens=MAX_TOKENS,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
            timeout=timeout,
        )
        text = "".join(block.text for block in response.content if block.type == "text")
        return LLMResponse(
            content=text,
            model=self.model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )


class OpenAIProvider(LLMProvider):
    """OpenAI GPT backend."""

    vendor = "openai"
    default_model = "gpt-4o"

    def __init__(self, model: Optional[str] = None, budget: Optional[RequestBudget] = None):
        openai = _import_sdk("openai")
        self.model = model or self.default_model
        self.budget = budget or RequestBudget()
        self.client = openai.OpenAI(
            api_key=_api_key("OPENAI_API_KEY"),
            timeout=self.budget.timeout,
            max_retries=0,
        )
        self.transient_errors = (openai.RateLimitError, openai.APIConnectionError)

    def _complete(self, system_prompt: str, user_prompt: str, timeout: float) -> LLMResponse:
        response = self.client.chat.completions.create(
            model=self.model,
            max_tokens=MAX_TOKENS,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            timeout=timeout,
        )
        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=self.model,
            input_tokens=response.usage.prompt_tokens,
            output_tokens=response.usage.completion_tokens,
        )


# Provider name (as in LLM_PROVIDER) -> class
PROVIDERS: Dict[str, Type[LLMProvider]] = {
    "anthropic": AnthropicProvider,
    "openai": OpenAIProvider,
}


def get_provider(provider_name: str = None, model: str = None) -> LLMProvider:
    """
    Build the configured generative backend.

    Args:
        provider_name: Key of PROVIDERS (default: LLM_PROVIDER env var, then "openai")
        model: Model name (default: LLM_MODEL env var, then the provider's default)

    Returns:
        LLMProvider with a RequestBudget read from the environment

    Raises:
        BackendUnavailableError: If the backend cannot be built for any reason
    """
    provider_name = (provider_name or os.getenv("LLM_PROVIDER") or "openai").strip().lower()
    model = model or os.getenv("LLM_MODEL") or None

    provider_class = PROVIDERS.get(provider_name)
    if provider_class is None:
        raise BackendUnavailableError(
            f"Unknown provider: {provider_name}. Use one of: {', '.join(sorted(PROVIDERS))}"
        )

    try:
        budget = RequestBudget.from_env()
    except ValueError as e:
        raise BackendUnavailableError(f"Invalid LLM request budget: {e}") from e

    return provider_class(model=model, budget=budget)
