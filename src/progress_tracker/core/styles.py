from __future__ import annotations
import json
import logging
import os
import glob
from dataclasses import asdict
from typing import List, Dict, Optional, Tuple
from jsonschema import Draft202012Validator
from importlib.resources import files as pkg_files

from progress_tracker.core.errors import StyleNotFound
from progress_tracker.core.formatter import PRESETS, BarConfig

logger = logging.getLogger(__name__)

BUILTIN_SOURCE = "<builtin>"
BUILTIN_VERSION = "1.0.0"


def _packaged_dir() -> List[str]:
    try:
        pkg_dir = str(pkg_files("progress_tracker").joinpath("styles"))
    except (ModuleNotFoundError, TypeError):
        return []
    return [pkg_dir] if os.path.isdir(pkg_dir) else []


def _packaged_schema_path() -> Optional[str]:
    for d in _packaged_dir():
        p = os.path.join(d, "style.schema.json")
        if os.path.exists(p):
            return p
    return None


def _env_dirs() -> List[str]:
    env = os.getenv("PROGRESS_STYLES_DIR")
    if not env:
        return []
    return [p for p in env.split(":") if p.strip()]


def builtin_style(name: str) -> dict:
    cfg = PRESETS[name]
    style = {k: v for k, v in asdict(cfg).items() if k != "name"}
    style["boundary_chars"] = list(cfg.boundary_chars)
    style["style_id"] = name
    style["version"] = BUILTIN_VERSION
    return style


def style_to_config(style: dict) -> BarConfig:
    """Build a BarConfig from a (validated) style dict; unset keys keep their defaults."""
    kwargs = {
        k: style[k]
        for k in ("bar_width", "show_ratio", "show_time_stats", "label", "ascii")
        if k in style
    }
    if "boundary_chars" in style:
        kwargs["boundary_chars"] = tuple(style["boundary_chars"])
    return BarConfig(name=style.get("style_id", "custom"), **kwargs)


def _version_key(version: Optional[str]) -> Tuple[int, int, int]:
    parts = [int(p) if p.isdigit() else 0 for p in (version or "0").split(".")]
    return tuple((parts + [0, 0, 0])[:3])


class StyleRegistry:
    """
    Finds and loads JSON bar styles by id/version with the following precedence:
      1) CLI-provided directories (search_dirs)
      2) PROGRESS_STYLES_DIR (':'-separated)
      3) Packaged styles under progress_tracker/styles/
      4) Built-in presets (simple, regular, advanced)

    The first directory holding a match supplies the candidates: index.json
    ids and aliases, <style_id>.json, and any other file carrying the id.
    Without an explicit version the highest semver-ish version wins.
    """

    def __init__(
        self, search_dirs: List[str] | None = None, schema_path: str | None = None
    ):
        cli_dirs = list(search_dirs or [])
        self.search_dirs: List[str] = [*cli_dirs, *_env_dirs(), *_packaged_dir()]

        schema_path = schema_path or _packaged_schema_path()
        self.schema = None
        self.validator = None
        if schema_path and os.path.exists(schema_path):
            with open(schema_path, "r", encoding="utf-8") as f:
                self.schema = json.load(f)
            self.validator = Draft202012Validator(self.schema)

        self._indices: Dict[str, dict] = {}
        for d in self.search_dirs:
            idx = os.path.join(d, "index.json")
            if os.path.isdir(d) and os.path.exists(idx):
                obj = self._parse_json(idx)
                if obj is None:
                    logger.warning("ignoring unreadable style index: %s", idx)
                    continue
                self._indices[d] = obj

    # ---------- internal helpers ----------

    def _index_matches(self, d: str, style_id: str) -> List[str]:
        out = []
        for s in self._indices.get(d, {}).get("styles", []):
            if s.get("style_id") == style_id or style_id in (s.get("aliases") or []):
                rel = s.get("path")
                if rel and os.path.exists(os.path.join(d, rel)):
                    out.append(os.path.join(d, rel))
        return out

    def _candidates_in(self, d: str, style_id: str) -> List[dict]:
        """Styles in one search dir answering to `style_id`: index entries first, then files."""
        files = sorted(
            p
            for p in glob.glob(os.path.join(d, "*.json"))
            if os.path.basename(p).lower() != "index.json"
            and not p.lower().endswith(".schema.json")
        )
        # <style_id>.json ahead of other files carrying the same id
        files.sort(key=lambda p: os.path.basename(p) != f"{style_id}.json")

        indexed = self._index_matches(d, style_id)
        found: List[dict] = []
        seen: set[str] = set()
        for p in indexed + files:
            real = os.path.realpath(p)
            if real in seen:
                continue
            seen.add(real)
            obj = self._parse_json(p)
            if not obj:
                continue
            if p in indexed or obj.get("style_id") == style_id:
                obj["_source_path"] = p
                found.append(obj)
        return found

    @staticmethod
    def _parse_json(path: str) -> Optional[dict]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError):
            return None

    # ---------- public API ----------

    def load(self, style_id: str, version: str | None = None) -> dict:
        candidates: List[dict] = []
        for d in self.search_dirs:
            if d and os.path.isdir(d):
                candidates = self._candidates_in(d, style_id)
                if candidates:
                    break

        if not candidates and style_id in PRESETS:
            obj = builtin_style(style_id)
            obj["_source_path"] = BUILTIN_SOURCE
            candidates.append(obj)

        if not candidates:
            raise StyleNotFound(
                f"Style '{style_id}' not found in: {self.search_dirs} or built-in presets"
            )

        if version:
            matches = [s for s in candidates if s.get("version") == version]
            if not matches:
                raise StyleNotFound(f"Style '{style_id}' version '{version}' not found")
            style = matches[0]
        else:
            style = max(candidates, key=lambda s: _version_key(s.get("version")))

        if self.validator:
            self.validator.validate(
                {k: v for k, v in style.items() if not k.startswith("_")}
            )

        logger.debug(
            "style '%s' resolved to %s (version %s)",
            style_id,
            style["_source_path"],
            style.get("version"),
        )
        return style

    def load_config(self, style_id: str, version: str | None = None) -> BarConfig:
        return style_to_config(self.load(style_id, version=version))

    def list_styles(self) -> List[Tuple[str, str, str, str]]:
        """(style_id, version, label, source) for every discoverable style; first match wins."""
        seen = set()
        listed = []

        for d in [p for p in self.search_dirs if p and os.path.isdir(p)]:
            idx = self._indices.get(d)
            if not idx:
                continue
            for s in idx.get("styles", []):
                key = (s.get("style_id"), s.get("version", ""))
                if key in seen:
                    continue
                seen.add(key)
                listed.append((key[0], key[1], s.get("label", ""), d))

        for name in PRESETS:
            key = (name, BUILTIN_VERSION)
            if key not in seen:
                seen.add(key)
                listed.append((name, BUILTIN_VERSION, f"{name} preset", BUILTIN_SOURCE))
        return listed
