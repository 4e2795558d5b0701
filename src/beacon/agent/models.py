"""
Sample data model.
"""

import json
from dataclasses import dataclass, field


@dataclass
class Sample:
    """One sampling cycle's values."""
    cpu_usage: float = 0.0
    disk_usage: float = 0.0
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def complete(self) -> bool:
        return not self.errors

    def to_payload(self) -> dict:
        """Ingestion payload; errors are logged, never sent."""
        return {
            'cpu_usage': self.cpu_usage,
            'disk_usage': self.disk_usage,
        }

    def to_json(self) -> str:
        """Compact JSON, rejecting NaN and infinity."""
        return json.dumps(self.to_payload(), separators=(',', ':'), allow_nan=False)
