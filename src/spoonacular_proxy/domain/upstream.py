"""Upstream request descriptors."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Locator:
    """Fully formed description of one upstream call."""

    method: str
    path: str
    params: dict[str, str] = field(default_factory=dict)
    form: dict[str, str] | None = None
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def get(cls, path: str, params: dict[str, object | None]) -> "Locator":
        """Build a GET locator, dropping parameters that are not set."""
        return cls(method="GET", path=path, params=_clean(params))

    @classmethod
    def post_form(cls, path: str, form: dict[str, object | None]) -> "Locator":
        """Build a form-encoded POST locator."""
        return cls(
            method="POST",
            path=path,
            form=_clean(form),
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )


def _clean(values: dict[str, object | None]) -> dict[str, str]:
    cleaned: dict[str, str] = {}
    for name, value in values.items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            cleaned[name] = "true" if value else "false"
        else:
            cleaned[name] = str(value)
    return cleaned
