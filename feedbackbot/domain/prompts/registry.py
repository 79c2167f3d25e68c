from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import json

import yaml

TASKS = ("reply", "summary", "actions")

# sampling used when a manifest does not override it
DEFAULT_TASK_PARAMS: dict[str, dict[str, Any]] = {
    "reply": {"temperature": 0.7, "max_tokens": 200},
    "summary": {"temperature": 0.5, "max_tokens": 150},
    "actions": {"temperature": 0.6, "max_tokens": 200},
}


@dataclass(frozen=True)
class TaskPrompt:
    name: str
    template: str
    temperature: float
    max_tokens: int


@dataclass(frozen=True)
class PromptPack:
    id: str
    description: str
    reply: TaskPrompt
    summary: TaskPrompt
    actions: TaskPrompt

    def task(self, name: str) -> TaskPrompt:
        if name not in TASKS:
            raise KeyError(f"Unknown prompt task: {name}")
        return getattr(self, name)


class PromptPackNotFound(RuntimeError):
    pass


class PromptPackRegistry:
    """
    packs_dir/
      default/
        manifest.yaml (or .yml / .json, optional)
        reply.user.txt
        summary.user.txt
        actions.user.txt

    Templates are formatted with `{rating}` and `{review}`.
    """

    def __init__(
        self,
        packs_dir: Path,
        default_pack: str = "default",
        allowed_packs: tuple[str, ...] | None = None,
    ):
        self.packs_dir = Path(packs_dir)
        self.default_pack = default_pack
        self.allowed_packs = allowed_packs

    def resolve_pack(self, pack_id: str | None) -> str:
        pid = (pack_id or "").strip() or self.default_pack
        if self.allowed_packs:
            allowed_lower = {p.lower() for p in self.allowed_packs}
            if pid.lower() not in allowed_lower:
                # not on the allow-list: fall back to the default pack
                return self.default_pack
        return pid

    def get(self, pack_id: str | None = None) -> PromptPack:
        pid = self.resolve_pack(pack_id)
        return self._load_pack_cached(str(self.packs_dir), pid)

    @staticmethod
    @lru_cache(maxsize=16)
    def _load_pack_cached(packs_dir_str: str, pid: str) -> PromptPack:
        packs_dir = Path(packs_dir_str)
        pack_dir = packs_dir / pid

        # case-insensitive lookup for case-sensitive filesystems
        if not pack_dir.exists() and packs_dir.is_dir():
            pid_lower = pid.lower()
            for candidate in packs_dir.iterdir():
                if candidate.is_dir() and candidate.name.lower() == pid_lower:
                    pack_dir = candidate
                    break

        if not pack_dir.is_dir():
            raise PromptPackNotFound(f"Prompt pack not found: {pack_dir}")

        manifest = _load_manifest(pack_dir)
        templates = manifest.get("templates") or {}
        params = manifest.get("params") or {}

        def read_task(task: str) -> TaskPrompt:
            filename = templates.get(task, f"{task}.user.txt")
            path = pack_dir / filename
            if not path.exists():
                raise PromptPackNotFound(f"Prompt template missing: {path}")
            task_params = {**DEFAULT_TASK_PARAMS[task], **(params.get(task) or {})}
            return TaskPrompt(
                name=task,
                template=path.read_text(encoding="utf-8").strip(),
                temperature=float(task_params["temperature"]),
                max_tokens=int(task_params["max_tokens"]),
            )

        return PromptPack(
            id=str(manifest.get("id", pack_dir.name)),
            description=str(manifest.get("description", "")),
            reply=read_task("reply"),
            summary=read_task("summary"),
            actions=read_task("actions"),
        )


def _load_manifest(pack_dir: Path) -> dict[str, Any]:
    """
    - manifest.yaml / manifest.yml first
    - then manifest.json
    - no manifest at all: file-name defaults and built-in sampling
    """
    yaml_path = pack_dir / "manifest.yaml"
    yml_path = pack_dir / "manifest.yml"
    json_path = pack_dir / "manifest.json"

    if yaml_path.exists() or yml_path.exists():
        path = yaml_path if yaml_path.exists() else yml_path
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise RuntimeError(f"Invalid manifest format: {path}")
        return data

    if json_path.exists():
        data = json.loads(json_path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise RuntimeError(f"Invalid manifest format: {json_path}")
        return data

    return {"id": pack_dir.name, "description": "", "templates": {}, "params": {}}
