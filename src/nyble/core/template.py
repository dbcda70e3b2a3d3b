"""Output templates with named scalar slots and repeatable pattern blocks, on jinja2

A repeatable block is a macro; its parameters are the block's fields. The
instances appended so far are rendered into the page as ``patterns.<name>``:

    <h1>{{ title }}</h1>
    <ul>{{ patterns.item }}</ul>
    {% macro item(name) %}<li>{{ name }}</li>{% endmacro %}
"""

from pathlib import Path
from typing import Any, Optional

import jinja2
from jinja2.runtime import Macro


PATTERNS_VAR = 'patterns'


class TemplateError(ValueError):
    """Raised when a template and the code filling it disagree about its structure."""


def _environment(loader: Optional[jinja2.BaseLoader] = None) -> jinja2.Environment:
    # Slot values are HTML fragments that were escaped when they were rendered.
    return jinja2.Environment(
        loader=loader,
        autoescape=False,
        trim_blocks=True,
        keep_trailing_newline=True,
    )


class Pattern:
    """One fillable instance of a template's repeatable block."""

    def __init__(self, name: str, macro: Macro, values: Optional[dict[str, str]] = None):
        self.name = name
        self._macro = macro
        self._values: dict[str, str] = dict(values or {})

    def set(self, field: str, value: Any) -> None:
        """Set a field. Names the block does not declare are kept and ignored at compile."""
        self._values[field] = str(value)

    def snapshot(self) -> "Pattern":
        return Pattern(self.name, self._macro, self._values)

    def compile(self) -> str:
        kwargs = {k: v for k, v in self._values.items() if k in self._macro.arguments}
        return str(self._macro(**kwargs))


class Template:
    """Builder owning scalar slot values and accumulated pattern instances until compiled."""

    def __init__(self, template: jinja2.Template, module=None):
        self._template = template
        self._module = module if module is not None else template.make_module({PATTERNS_VAR: {}})
        self._values: dict[str, str] = {}
        self._instances: dict[str, list[Pattern]] = {}

    @classmethod
    def from_string(cls, text: str) -> "Template":
        try:
            return cls(_environment().from_string(text))
        except jinja2.TemplateSyntaxError as e:
            raise TemplateError(f"Invalid template: {e}") from e

    @classmethod
    def from_file(cls, path: Path) -> "Template":
        path = Path(path)
        env = _environment(jinja2.FileSystemLoader(path.parent))
        try:
            return cls(env.get_template(path.name))
        except jinja2.TemplateSyntaxError as e:
            raise TemplateError(f"{path}: {e}") from e

    def _macro(self, name: str) -> Macro:
        macro = getattr(self._module, name, None)
        if not isinstance(macro, Macro):
            raise TemplateError(f"Pattern '{name}' not found in template")
        return macro

    def set(self, name: str, value: Any) -> None:
        self._values[name] = str(value)

    def get_pattern(self, name: str) -> Pattern:
        """Return a fresh, empty instance of the named pattern block."""
        return Pattern(name, self._macro(name))

    def append(self, name: str, pattern: Pattern) -> None:
        """Store a snapshot of a filled instance. Instances compile in append order."""
        self._macro(name)
        if pattern.name != name:
            raise TemplateError(f"Cannot append a '{pattern.name}' instance to pattern '{name}'")
        self._instances.setdefault(name, []).append(pattern.snapshot())

    def copy(self) -> "Template":
        """Independent copy sharing the compiled jinja2 template."""
        dup = Template(self._template, self._module)
        dup._values = dict(self._values)
        dup._instances = {
            name: [inst.snapshot() for inst in insts] for name, insts in self._instances.items()
        }
        return dup

    def compile(self) -> str:
        """Render slot values and joined pattern instances. Does not mutate state."""
        patterns = {
            name: ''.join(inst.compile() for inst in insts) for name, insts in self._instances.items()
        }
        return self._template.render({**self._values, PATTERNS_VAR: patterns})
