"""Backend configuration.

Example:
    config = BackendConfig.from_json("backend.json")
    pk, vk = setup(circuit, config=config)
"""

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any


@dataclass
class BackendConfig:
    """Proving backend configuration.

    Attributes:
        curve: Name of the pairing curve ('bn254' or 'bls12_381')
        check_satisfied: Check every constraint against the assignment before
            proving, to report the failing constraint instead of a QAP
            divisibility error
    """
    curve: str = "bn254"
    check_satisfied: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BackendConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise KeyError(f"Unknown config keys: {sorted(unknown)}. Available: {sorted(known)}")
        return cls(**data)

    @classmethod
    def from_json(cls, path: str | Path) -> "BackendConfig":
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with p.open("r", encoding="utf-8") as fh:
            return cls.from_dict(json.load(fh))


DEFAULT_CONFIG = BackendConfig()
