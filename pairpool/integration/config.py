"""
Pool configuration.

A pool's fee rate and fee sink are host-side configuration, not pool state.
Values come from the constructor, from `PAIRPOOL_*` environment variables, or
from a YAML mapping.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from ..kernels.python.cpmm_swap import DEFAULT_SINK_SHARE_BPS
from ..kernels.python.u64 import BPS_DENOM


DEFAULT_FEE_BPS = 30
DEFAULT_FEE_SINK = "fee-sink"
DEFAULT_POOL_ACCOUNT = "pool"
ENV_PREFIX = "PAIRPOOL_"


def _env_int(name: str, default: int, *, lo: int, hi: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        v = int(raw.strip())
    except ValueError:
        return int(default)
    if v < lo:
        return int(lo)
    if v > hi:
        return int(hi)
    return int(v)


def _env_str(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


@dataclass(frozen=True)
class PoolConfig:
    """
    Host configuration for one pool.

    Attributes:
        fee_bps: Swap fee in basis points (0-10000)
        sink_share_bps: Share of each swap fee paid to the fee sink
        fee_sink: Ledger account credited with the sink share of swap fees
        pool_account: Ledger account that custodies the pool's reserves
    """

    fee_bps: int = DEFAULT_FEE_BPS
    sink_share_bps: int = DEFAULT_SINK_SHARE_BPS
    fee_sink: str = DEFAULT_FEE_SINK
    pool_account: str = DEFAULT_POOL_ACCOUNT

    def __post_init__(self) -> None:
        for name in ("fee_bps", "sink_share_bps"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
            if not (0 <= v <= BPS_DENOM):
                raise ValueError(f"{name} must be in [0, {BPS_DENOM}]: {v}")
        for name in ("fee_sink", "pool_account"):
            v = getattr(self, name)
            if not isinstance(v, str) or not v.strip():
                raise ValueError(f"{name} must be a non-empty string")
        if self.fee_sink == self.pool_account:
            raise ValueError("fee_sink must differ from pool_account")

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> "PoolConfig":
        """Build a config from `<prefix>FEE_BPS`, `<prefix>SINK_SHARE_BPS`, `<prefix>FEE_SINK`, `<prefix>POOL_ACCOUNT`."""
        return cls(
            fee_bps=_env_int(f"{prefix}FEE_BPS", DEFAULT_FEE_BPS, lo=0, hi=BPS_DENOM),
            sink_share_bps=_env_int(f"{prefix}SINK_SHARE_BPS", DEFAULT_SINK_SHARE_BPS, lo=0, hi=BPS_DENOM),
            fee_sink=_env_str(f"{prefix}FEE_SINK", DEFAULT_FEE_SINK),
            pool_account=_env_str(f"{prefix}POOL_ACCOUNT", DEFAULT_POOL_ACCOUNT),
        )

    @classmethod
    def from_mapping(cls, obj: Mapping[str, Any]) -> "PoolConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(obj) - known)
        if unknown:
            raise ValueError(f"unknown pool config keys: {unknown}")
        return cls(**dict(obj))


def load_pool_config(path: Path, *, section: Optional[str] = None) -> PoolConfig:
    """
    Load a `PoolConfig` from a YAML file.

    The document is a mapping of config fields, or a mapping of named sections
    when `section` is given.
    """
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if obj is None:
        obj = {}
    if not isinstance(obj, Mapping):
        raise TypeError("pool config YAML must be a mapping")
    if section is not None:
        if section not in obj:
            raise KeyError(f"pool config section not found: {section!r}")
        obj = obj[section]
        if not isinstance(obj, Mapping):
            raise TypeError(f"pool config section {section!r} must be a mapping")
    return PoolConfig.from_mapping(obj)
