"""Jinja2 template rendering for HTML views.

Template conventions:
- Lookup keys are paths relative to templates/, the .html suffix is optional
  ("tasks/index" and "tasks/index.html" name the same template)
- Partials start with an underscore: tasks/_list.html, tasks/_item.html
- Layouts live in the _layout/ subdirectory
"""

from collections.abc import Iterable, Mapping
from pathlib import Path, PurePosixPath
from typing import Any

from jinja2 import (
    ChainableUndefined,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
    UndefinedError,
)

from task_board.exceptions import ConfigurationException, TemplateNotFoundException, TemplateRenderException
from task_board.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

TEMPLATE_SUFFIX = ".html"
LAYOUT_DIR = "_layout"
PARTIAL_PREFIX = "_"
CACHE_SIZE = 400


class BlankUndefined(ChainableUndefined):
    """Undefined that resolves every missing lookup to a blank value.

    Attribute and item access on a missing value chain to another blank, so
    optional UI state like ``{{ task.title }}`` renders empty instead of failing.
    """

    __slots__ = ()


class TemplateRenderer:
    """Renders named templates against a context mapping.

    One instance is built at startup and shared by every request. Rendering
    holds no per-call state, so concurrent use is safe.
    """

    def __init__(
        self,
        template_dir: Path,
        cache_enabled: bool = False,
        strict_undefined: bool = False,
        strict_templates: Iterable[str] = (),
        template_globals: Mapping[str, Any] | None = None,
    ):
        """Create the Jinja2 environments.

        Args:
            template_dir: Root of the template namespace
            cache_enabled: Keep compiled templates; when False every render
                re-reads the source from disk
            strict_undefined: Raise on undefined variables in every template
            strict_templates: Names rendered strictly even when the global
                policy is lenient
            template_globals: Values visible to every template (layout settings)
        """
        template_dir = Path(template_dir)
        if not template_dir.is_dir():
            raise ConfigurationException(
                "Template directory does not exist",
                details={"template_dir": str(template_dir)},
            )

        self.template_dir = template_dir
        self.cache_enabled = cache_enabled
        self.strict_undefined = strict_undefined
        self._strict_names = frozenset(self.resolve_name(name) for name in strict_templates)

        loader = FileSystemLoader(str(template_dir))
        self._lenient_env = self._build_environment(loader, BlankUndefined)
        self._strict_env = self._build_environment(loader, StrictUndefined)
        for env in (self._lenient_env, self._strict_env):
            env.globals.update(template_globals or {})

        log_with_context(
            logger,
            "info",
            "Template renderer configured",
            template_dir=str(template_dir),
            cache_enabled=cache_enabled,
            strict_undefined=strict_undefined,
            strict_templates=sorted(self._strict_names),
            event_type="renderer_config",
        )

    def _build_environment(self, loader: FileSystemLoader, undefined: type) -> Environment:
        return Environment(
            loader=loader,
            autoescape=True,
            undefined=undefined,
            cache_size=CACHE_SIZE if self.cache_enabled else 0,
            auto_reload=not self.cache_enabled,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    @staticmethod
    def resolve_name(template_name: str) -> str:
        """Map a lookup key to the template file name (adds .html when missing)."""
        name = template_name.strip().lstrip("/")
        if not PurePosixPath(name).suffix:
            name += TEMPLATE_SUFFIX
        return name

    @staticmethod
    def is_partial(template_name: str) -> bool:
        """Whether the name refers to a fragment rather than a full page."""
        return PurePosixPath(template_name).name.startswith(PARTIAL_PREFIX)

    def is_strict(self, template_name: str) -> bool:
        """Whether undefined variables raise for this template."""
        return self.strict_undefined or self.resolve_name(template_name) in self._strict_names

    def has_template(self, template_name: str) -> bool:
        try:
            self._lenient_env.get_template(self.resolve_name(template_name))
        except TemplateNotFound:
            return False
        return True

    def render(self, template_name: str, context: Mapping[str, Any] | None = None) -> str:
        """Render a template to HTML text.

        Args:
            template_name: Lookup key relative to the template root
            context: Variables available to the template

        Returns:
            Rendered HTML

        Raises:
            TemplateNotFoundException: The template (or one it includes) is missing
            TemplateRenderException: Evaluation failed, including undefined
                variables in strict mode
        """
        name = self.resolve_name(template_name)
        env = self._strict_env if self.is_strict(name) else self._lenient_env

        try:
            return env.get_template(name).render(dict(context or {}))
        except TemplateNotFound as e:
            missing = e.name or name
            log_with_context(
                logger,
                "error",
                "Template not found",
                template_name=name,
                missing=str(missing),
                event_type="template_not_found",
            )
            raise TemplateNotFoundException(str(missing), details={"requested": name}) from e
        except UndefinedError as e:
            raise TemplateRenderException(f"Undefined variable in {name}: {e.message}", name) from e
        except TemplateError as e:
            log_with_context(
                logger,
                "error",
                "Template evaluation failed",
                template_name=name,
                error=str(e),
                error_type=type(e).__name__,
                event_type="template_render_error",
            )
            raise TemplateRenderException(f"Failed to render {name}", name) from e
