from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ChecksRunConfig:
    enabled: Optional[list[str]] = None   # None => not explicitly set (use enabled_by_default)
    disabled: list[str] = field(default_factory=list)
    options: dict[str, Any] = field(default_factory=dict)
    force: bool = False

    @classmethod
    def from_payload(cls, payload: Any) -> "ChecksRunConfig":
        """
        Accepts:
          - None
          - ["filename", ...]
          - {"enabled":[...], "disabled":[...], "options":{...}, "force":true}
        Also tolerates {"checks":["..."]} and a bare string for enabled.
        """
        if payload is None:
            return cls()

        if isinstance(payload, list):
            return cls(enabled=[x for x in payload if isinstance(x, str)])

        if isinstance(payload, dict):
            enabled = payload.get("enabled", payload.get("checks", None))
            disabled = payload.get("disabled", [])
            options = payload.get("options", {})

            if isinstance(enabled, str):
                enabled = [enabled]
            if isinstance(disabled, str):
                disabled = [disabled]

            force = payload.get("force", False)

            # "force" is a flag, never a check name
            if isinstance(enabled, list):
                enabled = [x for x in enabled if isinstance(x, str) and x != "force"]
            else:
                enabled = None

            return cls(
                enabled=enabled,
                disabled=[x for x in disabled if isinstance(x, str)] if isinstance(disabled, list) else [],
                options=options if isinstance(options, dict) else {},
                force=bool(force),
            )

        return cls()

    def merged(self, other: "ChecksRunConfig") -> "ChecksRunConfig":
        """Overlay `other` on top of self; options merge per check."""
        options: dict[str, Any] = {k: dict(v) if isinstance(v, dict) else v for k, v in self.options.items()}
        for name, opts in (other.options or {}).items():
            base = options.get(name)
            if isinstance(base, dict) and isinstance(opts, dict):
                options[name] = {**base, **opts}
            else:
                options[name] = opts
        return ChecksRunConfig(
            enabled=other.enabled if other.enabled is not None else self.enabled,
            disabled=sorted(set(self.disabled) | set(other.disabled)),
            options=options,
            force=self.force or other.force,
        )

    def check_options(self, check_name: str) -> dict[str, Any]:
        opts = self.options or {}
        v = opts.get(check_name, {})
        return v if isinstance(v, dict) else {}

    def is_enabled_with_default(self, name: str, *, enabled_by_default: bool = True) -> bool:
        if name in (self.disabled or []):
            return False

        # enabled explicitly set => allowlist semantics
        if self.enabled is not None:
            return name in self.enabled

        return bool(enabled_by_default)
