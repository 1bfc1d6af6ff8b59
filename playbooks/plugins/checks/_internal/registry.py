from __future__ import annotations

import hashlib
import importlib.util
import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any, Dict, Iterable, List, Optional

from .cache import ChecksRunCache, make_cache_key
from .config import ChecksRunConfig
from .graph import CheckExecutionGraph, CheckNode
from .types import CheckPlugin, Finding

_RUN_CACHE = ChecksRunCache(max_entries=256, ttl_seconds=300)

# playbooks/plugins/checks/_internal/registry.py -> parents[1] = checks dir
BUILTIN_CHECKS_DIR = Path(__file__).resolve().parents[1]

log = logging.getLogger("playbooks.checks")


def get_run_cache() -> ChecksRunCache:
    return _RUN_CACHE


@dataclass(frozen=True)
class CheckInfo:
    name: str
    version: str
    phase: str
    priority: int
    enabled_by_default: bool
    depends_on: tuple[str, ...]
    applies_to: tuple[str, ...]
    file: str


class CheckRegistry:
    def __init__(self, checks_dir: str | Path | None = None, *, extra_dirs: Iterable[str | Path] = ()):
        self._dirs: List[Path] = [Path(checks_dir) if checks_dir else BUILTIN_CHECKS_DIR]
        self._dirs.extend(Path(d) for d in extra_dirs)
        self._plugins: Dict[str, Any] = {}
        self._plugin_files: Dict[str, Path] = {}
        self._fingerprint: Optional[str] = None

    @property
    def fingerprint(self) -> str:
        if self._fingerprint is None:
            self._fingerprint = self._compute_fingerprint()
        return self._fingerprint

    def reload(self) -> None:
        self._plugins.clear()
        self._plugin_files.clear()
        self._fingerprint = None
        self.load_all()

    def load_all(self) -> None:
        for py in self._iter_files():
            plugin = self._load_plugin_from_file(py)
            if plugin.name in self._plugins:
                raise ValueError(f"Duplicate check name: {plugin.name} ({py})")
            self._plugins[plugin.name] = plugin
            self._plugin_files[plugin.name] = py

    def names(self) -> List[str]:
        return sorted(self._plugins.keys())

    def get(self, name: str):
        return self._plugins.get(name)

    def list_checks(self) -> List[CheckInfo]:
        out: List[CheckInfo] = []
        for n in self.names():
            p = self._plugins[n]
            out.append(
                CheckInfo(
                    name=n,
                    version=str(getattr(p, "version", "0.0.0")),
                    phase=str(getattr(p, "phase", "document")),
                    priority=int(getattr(p, "priority", 100)),
                    enabled_by_default=bool(getattr(p, "enabled_by_default", True)),
                    depends_on=tuple(self._deps(p)),
                    applies_to=tuple(getattr(p, "applies_to", None) or ()),
                    file=str(self._plugin_files[n]),
                )
            )
        return out

    def get_active_checks(self, cfg: ChecksRunConfig) -> List[Any]:
        active: List[Any] = []
        for name in self.names():
            p = self._plugins[name]
            if cfg.is_enabled_with_default(
                name,
                enabled_by_default=bool(getattr(p, "enabled_by_default", True)),
            ):
                active.append(p)
        return active

    def execution_order(self, plugins: List[Any]) -> List[str]:
        graph = CheckExecutionGraph()
        for p in plugins:
            graph.add_node(
                CheckNode(
                    name=p.name,
                    phase=getattr(p, "phase", "document"),
                    priority=getattr(p, "priority", 100),
                    depends_on=self._deps(p),
                )
            )
        return graph.topological_sort()

    def run(
        self,
        *,
        context: Dict[str, Any],
        cfg: ChecksRunConfig,
        intent: Optional[str] = None,
    ) -> List[Finding]:
        from .resolver import resolve_checks

        t0_total = time.perf_counter()

        outputs = context.setdefault("check_outputs", {})
        if not isinstance(outputs, dict):
            outputs = {}
            context["check_outputs"] = outputs

        cache_key = make_cache_key(
            intent=intent,
            cfg=cfg,
            context=context,
            checks_fingerprint=self.fingerprint,
        )

        if not cfg.force:
            t0_cache = time.perf_counter()
            cached = _RUN_CACHE.get(cache_key)
            t1_cache = time.perf_counter()

            if cached is not None:
                outputs["__meta__"] = {
                    "cache": "hit",
                    "cache_lookup_ms": int(round((t1_cache - t0_cache) * 1000)),
                    "order": list(cached.order),
                    "skipped": list(cached.skipped),
                    "check_count": len(cached.order),
                    "finding_count": len(cached.findings),
                    "total_ms": int(round((time.perf_counter() - t0_total) * 1000)),
                    "checks_fingerprint": self.fingerprint,
                }
                log.debug("checks.run cache=hit findings=%s", len(cached.findings))
                return list(cached.findings)

        t0_resolve = time.perf_counter()
        plugins, skipped = resolve_checks(self, intent=intent, cfg=cfg)
        t1_resolve = time.perf_counter()

        order = self.execution_order(plugins)
        t1_sort = time.perf_counter()

        findings: List[Finding] = []
        for name in order:
            plugin = self._plugins[name]
            opts = cfg.check_options(name)

            t0_inv = time.perf_counter()
            try:
                out = self._invoke(plugin, context=context, options=opts)
            except Exception as e:
                log.exception("Check %s failed", name)
                out = [
                    Finding(
                        check=name,
                        severity="error",
                        code="check.failed",
                        message=f"Check execution failed: {type(e).__name__}: {e}",
                    )
                ]
            t1_inv = time.perf_counter()

            # by path, then line; ties keep the order the check emitted
            out.sort(key=lambda f: (f.path or "", f.line or 0))

            outputs[name] = {
                "finding_count": len(out),
                "duration_ms": int(round((t1_inv - t0_inv) * 1000)),
            }
            findings.extend(out)

        _RUN_CACHE.set(cache_key, findings, order, skipped)

        outputs["__meta__"] = {
            "cache": "bypass" if cfg.force else "miss",
            "resolve_ms": int(round((t1_resolve - t0_resolve) * 1000)),
            "toposort_ms": int(round((t1_sort - t1_resolve) * 1000)),
            "order": order,
            "skipped": skipped,
            "check_count": len(order),
            "finding_count": len(findings),
            "total_ms": int(round((time.perf_counter() - t0_total) * 1000)),
            "checks_fingerprint": self.fingerprint,
        }

        log.debug(
            "checks.run cache=%s checks=%s findings=%s total_ms=%s",
            outputs["__meta__"]["cache"],
            len(order),
            len(findings),
            outputs["__meta__"]["total_ms"],
        )
        return findings

    # --- internals ---

    @staticmethod
    def _deps(plugin: Any) -> List[str]:
        deps = getattr(plugin, "depends_on", None) or []
        if isinstance(deps, str):
            deps = [deps]
        return [d for d in deps if isinstance(d, str) and d]

    def _invoke(self, plugin: Any, *, context: Dict[str, Any], options: Dict[str, Any]) -> List[Finding]:
        out: List[Finding] = []
        for item in plugin.run(context=context, options=options) or []:
            if isinstance(item, dict):
                item = Finding(check=plugin.name, **{k: v for k, v in item.items() if k != "check"})
            out.append(item)
        return out

    def _iter_files(self) -> List[Path]:
        files: List[Path] = []
        for d in self._dirs:
            if not d.is_dir():
                log.warning("Check directory not found: %s", d)
                continue
            for py in sorted(d.glob("*.py")):
                if py.name.startswith("_"):
                    continue
                files.append(py)
        return files

    def _compute_fingerprint(self) -> str:
        h = hashlib.sha256()
        for py in self._iter_files():
            h.update(py.name.encode("utf-8"))
            h.update(b"\0")
            h.update(py.read_bytes())
            h.update(b"\0")
        return h.hexdigest()[:16]

    def _load_module(self, file_path: Path) -> ModuleType:
        file_path = file_path.resolve()
        # module name must be deterministic across interpreter restarts
        path_hash = hashlib.sha1(str(file_path).replace("\\", "/").encode("utf-8")).hexdigest()[:12]
        module_qualname = f"playbooks.plugins.checks._runtime.{file_path.stem}_{path_hash}"

        spec = importlib.util.spec_from_file_location(module_qualname, str(file_path))
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load spec for {module_qualname} from {file_path}")

        module = importlib.util.module_from_spec(spec)

        # register before exec_module (dataclasses looks the module up)
        sys.modules[module_qualname] = module
        try:
            spec.loader.exec_module(module)
        except Exception:
            sys.modules.pop(module_qualname, None)
            raise
        return module

    def _load_plugin_from_file(self, file_path: Path) -> CheckPlugin:
        module = self._load_module(file_path)

        plugin = getattr(module, "CHECK", None)
        if plugin is None:
            raise AttributeError(f"{file_path.name} must define CHECK")
        if not hasattr(plugin, "name"):
            raise AttributeError(f"{file_path.name}: CHECK must have 'name'")
        if not callable(getattr(plugin, "run", None)):
            raise AttributeError(f"{file_path.name}: CHECK must implement run()")
        return plugin
