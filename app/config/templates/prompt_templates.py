"""
Prompt Template Engine for dynamic prompt generation.
Handles template loading, rendering, and validation.
"""
import yaml
from typing import Dict, Any, Optional, List
from pathlib import Path
from jinja2 import Environment, StrictUndefined, Template
from dataclasses import dataclass

from app.core.exceptions import ConfigurationError
from app.utils.logging import CorrelatedLogger


@dataclass(frozen=True)
class PromptConfig:
    """One entry of the mode registry: template plus call parameters."""
    mode: str
    system_role: str
    template: str
    transcript_limit: Optional[int]
    max_tokens: int
    temperature: float


class PromptTemplateEngine:
    """
    Template engine for managing and rendering optimization prompts.

    Each prompt lives in ``prompts/<mode>.yaml`` and carries the Jinja2
    template together with its transcript limit, token budget and
    temperature. Adding a mode means adding a YAML file and a response
    schema; no branching code changes.
    """

    REQUIRED_KEYS = ("system_role", "template", "max_tokens", "temperature")

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize the template engine.

        Args:
            config_dir: Path to configuration directory. Defaults to app/config/
        """
        self.logger = CorrelatedLogger(__name__)

        if config_dir is None:
            config_dir = Path(__file__).parent.parent

        self.config_dir = Path(config_dir)
        self.prompts_dir = self.config_dir / "prompts"

        self.jinja_env = Environment(
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,
            undefined=StrictUndefined
        )

        # Cache for loaded configurations and compiled templates
        self._config_cache: Dict[str, PromptConfig] = {}
        self._template_cache: Dict[str, Template] = {}

        self.logger.info(f"PromptTemplateEngine initialized with config_dir: {self.config_dir}")

    def load_prompt_config(self, mode: str) -> PromptConfig:
        """
        Load prompt configuration for a mode.

        Raises:
            ConfigurationError: If configuration cannot be loaded
        """
        if mode in self._config_cache:
            return self._config_cache[mode]

        config_path = self.prompts_dir / f"{mode}.yaml"

        if not config_path.exists():
            raise ConfigurationError(
                f"prompt '{mode}'",
                f"not found, available: {', '.join(self.get_available_modes())}"
            )

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"prompt '{mode}'", str(e))

        config = self._build_prompt_config(mode, config_data)
        self._config_cache[mode] = config

        self.logger.info(f"Loaded prompt configuration: {mode}")
        return config

    def render_prompt(self, mode: str, **template_vars) -> str:
        """
        Render the instruction text for a mode.

        Args:
            mode: Registry key (e.g. 'seo')
            **template_vars: Variables to pass to the template

        Returns:
            Rendered prompt string
        """
        config = self.load_prompt_config(mode)

        template = self._template_cache.get(mode)
        if template is None:
            template = self.jinja_env.from_string(config.template)
            self._template_cache[mode] = template

        try:
            rendered = template.render(**template_vars).strip()
        except Exception as e:
            self.logger.error(f"Failed to render prompt: {mode} - {str(e)}")
            raise ConfigurationError(f"prompt '{mode}'", f"rendering failed: {str(e)}")

        self.logger.debug(f"Rendered prompt for {mode} ({len(rendered)} chars)")
        return rendered

    def get_available_modes(self) -> List[str]:
        """Get list of modes with a prompt file."""
        if not self.prompts_dir.exists():
            return []

        return sorted(
            item.stem for item in self.prompts_dir.iterdir()
            if item.is_file() and item.suffix == '.yaml'
        )

    def _build_prompt_config(self, mode: str, config_data: Dict[str, Any]) -> PromptConfig:
        """Build PromptConfig object from raw configuration data."""
        missing = [key for key in self.REQUIRED_KEYS if key not in config_data]
        if missing:
            raise ConfigurationError(f"prompt '{mode}'", f"missing keys: {', '.join(missing)}")

        if not str(config_data['template']).strip():
            raise ConfigurationError(f"prompt '{mode}'", "template cannot be empty")

        limit = config_data.get('transcript_limit')

        return PromptConfig(
            mode=mode,
            system_role=config_data['system_role'],
            template=config_data['template'],
            transcript_limit=int(limit) if limit is not None else None,
            max_tokens=int(config_data['max_tokens']),
            temperature=float(config_data['temperature'])
        )


# Global template engine instance
_template_engine = None

def get_template_engine() -> PromptTemplateEngine:
    """Get global template engine instance (singleton pattern)."""
    global _template_engine
    if _template_engine is None:
        _template_engine = PromptTemplateEngine()
    return _template_engine
