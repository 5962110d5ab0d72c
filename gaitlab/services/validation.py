"""
Payload validation

Shape checks for client JSON. Each check returns a ValidationResult listing
every violation instead of raising on the first one.
"""
import json
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

QUATERNION_COMPONENTS = ("w", "x", "y", "z")


@dataclass
class ValidationResult:
    """Tagged validation outcome: valid, or the list of violations"""
    violations: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.violations

    def add(self, violation: str) -> None:
        self.violations.append(violation)

    def summary(self) -> str:
        return "; ".join(self.violations)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a sample component
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int too large for a float
        return False


def validate_experiment_name(name: Any) -> ValidationResult:
    result = ValidationResult()
    if not isinstance(name, str) or not name.strip():
        result.add("experiment_name must be a non-empty string")
    return result


def validate_batch(payload: Any) -> ValidationResult:
    """
    Check the envelope of an ingestion batch

    Args:
        payload: Decoded request body

    Returns:
        ValidationResult for device and seconds_data presence
    """
    result = ValidationResult()
    if not isinstance(payload, dict):
        result.add("payload must be a JSON object")
        return result

    device = payload.get("device")
    if not isinstance(device, str) or not device:
        result.add("device is required")

    seconds_data = payload.get("seconds_data")
    if not isinstance(seconds_data, list) or not seconds_data:
        result.add("seconds_data must be a non-empty array")

    return result


def validate_sample(sample: Any, position: int) -> Optional[str]:
    """Return a violation for one quaternion sample, or None"""
    if not isinstance(sample, dict):
        return f"quaternions[{position}] must be an object with w, x, y, z"
    missing = [c for c in QUATERNION_COMPONENTS if c not in sample]
    if missing:
        return f"quaternions[{position}] is missing {', '.join(missing)}"
    bad = [c for c in QUATERNION_COMPONENTS if not _is_number(sample[c])]
    if bad:
        return f"quaternions[{position}] has non-numeric {', '.join(bad)}"
    return None


def validate_entry(entry: Any, expected_samples: int = 0) -> ValidationResult:
    """
    Check one second of readings

    Args:
        entry: One element of seconds_data
        expected_samples: Required sample count per second (0 = any)

    Returns:
        ValidationResult for timestamp and quaternions
    """
    result = ValidationResult()
    if not isinstance(entry, dict):
        result.add("entry must be a JSON object")
        return result

    timestamp = entry.get("timestamp")
    if not isinstance(timestamp, str) or not timestamp.strip():
        result.add("timestamp must be a non-empty string")

    quaternions = entry.get("quaternions")
    if not isinstance(quaternions, list) or not quaternions:
        result.add("quaternions must be a non-empty array")
    else:
        for position, sample in enumerate(quaternions):
            violation = validate_sample(sample, position)
            if violation:
                result.add(violation)
                break
        if expected_samples and len(quaternions) != expected_samples:
            result.add(f"expected {expected_samples} samples, got {len(quaternions)}")

    return result


def normalize_samples(quaternions: List[Dict[str, Any]]) -> List[Dict[str, float]]:
    """Keep only the four components of each validated sample, as floats"""
    return [{c: float(sample[c]) for c in QUATERNION_COMPONENTS} for sample in quaternions]


def normalize_note(note: Any) -> Optional[str]:
    """Empty notes become None; non-string notes are stored as JSON text"""
    if not note:
        return None
    if isinstance(note, str):
        return note
    return json.dumps(note)
