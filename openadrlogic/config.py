from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

UnknownVariantPolicy = Literal["fail", "skip"]


@dataclass(frozen=True)
class DecodeConfig:
    # Stop at the first failing field; when False every field error of a
    # document is collected into one DecodeErrors.
    fail_fast: bool = True

    # Program.payloadDescriptors elements whose objectType is not a known
    # payload descriptor: "fail" rejects the field, "skip" drops the element.
    unknown_payload_descriptors: UnknownVariantPolicy = "fail"


def default_config() -> DecodeConfig:
    return DecodeConfig()
