"""Processor settings stored in a gateway provider's extended data.

The settings document is serialized as JSON under a single extended-data
key, so provider records stay schema-free while the processor still gets a
validated configuration object.
"""

from typing import Literal

from pydantic import BaseModel

PROCESSOR_SETTINGS_KEY = "processorSettings"


class ProcessorSettings(BaseModel):
    vendor_name: str = ""
    mode: Literal["simulator", "test", "live"] = "simulator"
    return_url: str = ""
    abort_url: str = ""

    @classmethod
    def from_extended_data(cls, extended_data: dict[str, str] | None) -> "ProcessorSettings":
        """Read settings from an extended-data map. Missing settings yield defaults."""
        raw = (extended_data or {}).get(PROCESSOR_SETTINGS_KEY)
        if not raw:
            return cls()
        return cls.model_validate_json(raw)

    def to_extended_data(self) -> dict[str, str]:
        return {PROCESSOR_SETTINGS_KEY: self.model_dump_json()}
