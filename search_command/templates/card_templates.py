"""
Adaptive Card template loading and expansion.

Templates are JSON files using the Adaptive Card ``${expression}`` syntax.
Expansion goes through a Jinja2 environment whose variable delimiters are
``${`` and ``}``; every substituted value is JSON-escaped so it can sit
inside a JSON string literal.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import aiofiles
from jinja2 import Environment, StrictUndefined, TemplateError
from pydantic import BaseModel

from search_command.errors import ExpansionError, TemplateLoadError

logger = logging.getLogger(__name__)

BindingData = Union[BaseModel, Mapping[str, Any]]


def _json_escape(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    # Strip the surrounding quotes json.dumps adds
    return json.dumps(value if isinstance(value, str) else str(value))[1:-1]


def _binding_dict(data: BindingData) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, Mapping):
        return dict(data)
    raise ExpansionError(f"Unsupported binding data type: {type(data).__name__}")


class CardTemplateResolver:
    """
    Resolves named card templates to files and expands them against data.

    Usage:
        resolver = CardTemplateResolver({"package": Path("PackageCard.json")})
        card = await resolver.render("package", CardPackage.create(record))
    """

    def __init__(self, template_paths: Mapping[str, Union[str, Path]]):
        self.template_paths = {name: Path(path) for name, path in template_paths.items()}
        self._env = Environment(
            variable_start_string="${",
            variable_end_string="}",
            undefined=StrictUndefined,
            finalize=_json_escape,
            autoescape=False,
            keep_trailing_newline=True,
        )

    async def load(self, name: str) -> str:
        """
        Read a template body.

        Raises:
            TemplateLoadError: unknown template name or unreadable file
        """
        path = self.template_paths.get(name)
        if path is None:
            raise TemplateLoadError(name, "no template registered with this name")

        try:
            async with aiofiles.open(path, mode="r", encoding="utf-8") as f:
                return await f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateLoadError(name, f"cannot read {path}: {e}") from e

    def expand(self, template_body: str, data: BindingData) -> str:
        """
        Bind data into a template body and return the card JSON string.

        Raises:
            ExpansionError: bad template syntax, missing binding field, or
                output that is not valid JSON
        """
        binding = _binding_dict(data)
        try:
            expanded = self._env.from_string(template_body).render(binding)
        except TemplateError as e:
            raise ExpansionError(f"Template expansion failed: {e}") from e

        try:
            json.loads(expanded)
        except json.JSONDecodeError as e:
            raise ExpansionError(f"Expanded template is not valid JSON: {e}") from e

        return expanded

    async def render(self, name: str, data: BindingData) -> Dict[str, Any]:
        """Load, expand and parse a named template into card content."""
        body = await self.load(name)
        content = json.loads(self.expand(body, data))
        logger.debug(f"Rendered '{name}' card")
        return content
