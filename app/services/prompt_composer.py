"""Prompt composition for optimization requests."""
from dataclasses import dataclass
from typing import List, Optional

from app.config.schemas import OptimizationMode, TRENDING_KEYWORDS, ResponseValidator, get_response_validator
from app.config.templates import PromptTemplateEngine, get_template_engine
from app.core.exceptions import UnsupportedModeError
from app.models.transcript import Transcript
from app.models.video import VideoMetadata


@dataclass(frozen=True)
class ComposedPrompt:
    """Everything the optimization client needs for one model call."""
    mode: str
    instruction_text: str
    system_role: str
    max_tokens: int
    temperature: float
    response_keys: List[str]


class PromptComposer:
    """Selects the template for a mode and fills it with video content."""

    SUPPORTED_MODES = [mode.value for mode in OptimizationMode]

    def __init__(
        self,
        template_engine: Optional[PromptTemplateEngine] = None,
        validator: Optional[ResponseValidator] = None
    ):
        self.template_engine = template_engine or get_template_engine()
        self.validator = validator or get_response_validator()

    @classmethod
    def validate_mode(cls, mode: str) -> str:
        """Return the mode if it is supported, else raise UnsupportedModeError."""
        if mode not in cls.SUPPORTED_MODES:
            raise UnsupportedModeError(str(mode), cls.SUPPORTED_MODES)
        return mode

    @staticmethod
    def truncate(text: str, limit: Optional[int]) -> str:
        """Cut text to at most ``limit`` characters; None keeps it whole."""
        if limit is None:
            return text
        return text[:limit]

    def compose(self, mode: str, metadata: VideoMetadata, transcript: Transcript) -> ComposedPrompt:
        """Build the prompt for one of the optimization modes."""
        self.validate_mode(mode)
        config = self.template_engine.load_prompt_config(mode)

        return self._compose(
            mode,
            title=metadata.title or "",
            description=metadata.description or "",
            transcript=self.truncate(transcript.text, config.transcript_limit),
        )

    def compose_trending_keywords(self, topic: str, category: str = "general") -> ComposedPrompt:
        """Build the prompt for trending keyword generation."""
        return self._compose(TRENDING_KEYWORDS, topic=topic, category=category)

    def _compose(self, mode: str, **template_vars) -> ComposedPrompt:
        config = self.template_engine.load_prompt_config(mode)
        response_keys = self.validator.response_keys(mode)

        instruction_text = self.template_engine.render_prompt(
            mode, response_keys=response_keys, **template_vars
        )

        return ComposedPrompt(
            mode=mode,
            instruction_text=instruction_text,
            system_role=config.system_role,
            max_tokens=config.max_tokens,
            temperature=config.temperature,
            response_keys=response_keys,
        )
