#!/usr/bin/env python3

"""Target expansion configuration"""

import pathlib

import yaml
from typing_extensions import Self

MIB = 1024 * 1024


class ExpansionConfig:
    """
    Growth applied to the target when a patch has the expanded flag set.

    Originals are expected to be `base_size` bytes long. The target is grown
    to `expanded_size` bytes and the appended region is filled with `fill`.
    The diff engine omits tail bytes equal to `fill`.
    """

    KEYS = ("base_size", "expanded_size", "fill")

    def __init__(
        self,
        base_size: int = 16 * MIB,
        expanded_size: int = 32 * MIB,
        fill: int = 0xFF,
    ):
        if base_size <= 0:
            raise ValueError(f"base_size must be positive ({base_size})")
        if expanded_size <= base_size:
            raise ValueError(f"expanded_size must be larger than base_size ({expanded_size} <= {base_size})")
        if expanded_size > 2**32:
            raise ValueError(f"expanded_size exceeds 32 bit offsets ({expanded_size})")
        if not 0 <= fill <= 0xFF:
            raise ValueError(f"fill must be a byte value ({fill})")
        self.base_size = base_size
        self.expanded_size = expanded_size
        self.fill = fill

    @property
    def fill_byte(self) -> bytes:
        return bytes([self.fill])

    def __eq__(self, other):
        if not isinstance(other, ExpansionConfig):
            return NotImplemented
        return (self.base_size, self.expanded_size, self.fill) == (
            other.base_size,
            other.expanded_size,
            other.fill,
        )

    def __repr__(self):
        return (
            f"ExpansionConfig(base_size={self.base_size}, "
            f"expanded_size={self.expanded_size}, fill=0x{self.fill:02x})"
        )

    @classmethod
    def from_dict(cls, values: dict) -> Self:
        unknown = set(values) - set(cls.KEYS)
        if unknown:
            raise ValueError(f"Unknown expansion options: {', '.join(sorted(map(str, unknown)))}")
        for key, val in values.items():
            if not isinstance(val, int) or isinstance(val, bool):
                raise ValueError(f"{key} must be an integer ({val!r})")
        return cls(**values)


DEFAULT_EXPANSION = ExpansionConfig()


def load_config(path: str | pathlib.Path) -> ExpansionConfig:
    """
    Load an expansion configuration from a YAML file

    Missing keys take their default values, an empty file is the default
    configuration.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            values = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"{path}: {e}") from e
    if values is None:
        return ExpansionConfig()
    if not isinstance(values, dict):
        raise ValueError(f"{path} does not contain a mapping")
    return ExpansionConfig.from_dict(values)
