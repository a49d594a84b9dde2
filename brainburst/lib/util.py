import typing as t

import yaml


def merge(base: dict[str, t.Any], overlay: t.Mapping[str, t.Any]) -> dict[str, t.Any]:
    """Recursively merge ``overlay`` into a copy of ``base``; overlay wins on conflicts."""
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, t.Mapping):
            merged[key] = merge(current, value)
        else:
            merged[key] = value
    return merged


def parse_override(override: t.Iterable[str]) -> dict[str, t.Any]:
    """
    Turn ``key.path=value`` options into a nested mapping, e.g.
    ``["web.brainburst.backend.port=9000"]`` becomes
    ``{"web": {"brainburst": {"backend": {"port": 9000}}}}``. Values are
    parsed as YAML scalars.
    """
    result: dict[str, t.Any] = {}
    for option in override:
        path, sep, raw = option.partition("=")
        if not sep or not path.strip():
            raise ValueError(f"invalid override {option!r}: expected key=value")
        value: t.Any = yaml.safe_load(raw.strip())
        for key in reversed(path.strip().split(".")):
            value = {key: value}
        result = merge(result, value)
    return result
