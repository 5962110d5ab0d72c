"""
Ingestion Pipeline

Validates batches of per-second quaternion readings and appends them to the
reading store in one grouped write.
"""
import json
from typing import Any, List

from gaitlab.core.enums import IngestStatus
from gaitlab.core.exceptions import GaitLabError, ValidationError, UnexpectedError
from gaitlab.core.timeutils import normalize_timestamp
from gaitlab.logger import logger
from gaitlab.models.schemas import IngestFailure, IngestResult
from gaitlab.repositories.reading_repository import GaitReadingRepository
from gaitlab.services.validation import (
    validate_batch,
    validate_entry,
    normalize_note,
    normalize_samples,
)


class IngestionPipeline:
    """Batch ingestion with per-entry outcomes"""

    def __init__(self, readings: GaitReadingRepository, expected_samples_per_second: int = 0):
        self.readings = readings
        self.expected_samples_per_second = expected_samples_per_second

    def ingest(self, payload: Any) -> IngestResult:
        """
        Validate and store one batch

        Invalid entries are skipped and reported; the rest are written as a
        single batch whose rows succeed or fail independently.

        Args:
            payload: Decoded body {"device": str, "seconds_data": [...]}

        Returns:
            IngestResult with status STORED or PARTIAL

        Raises:
            ValidationError: Missing device/seconds_data, or every entry invalid
            UnexpectedError: Any other failure
        """
        try:
            return self._ingest(payload)
        except GaitLabError:
            raise
        except Exception as e:
            logger.error(f"INGESTION: Error processing batch: {e}")
            raise UnexpectedError(f"Error processing batch ingestion request: {e}", details=str(e)) from e

    def _ingest(self, payload: Any) -> IngestResult:
        envelope = validate_batch(payload)
        if not envelope.valid:
            raise ValidationError(
                "Missing required fields: device, or non-empty seconds_data array",
                details=envelope.summary()
            )

        device = payload["device"]
        entries = payload["seconds_data"]

        failures: List[IngestFailure] = []
        prepared = []
        positions = []

        for index, entry in enumerate(entries):
            check = validate_entry(entry, self.expected_samples_per_second)
            if not check.valid:
                logger.warning(f"INGESTION: Skipping invalid entry {index} for device {device}: {check.summary()}")
                failures.append(IngestFailure(
                    index=index,
                    timestamp=entry.get("timestamp") if isinstance(entry, dict) else None,
                    reason="invalid_entry",
                    message=check.summary(),
                ))
                continue

            prepared.append(GaitReadingRepository.prepare_reading(
                device,
                normalize_timestamp(entry["timestamp"]),
                json.dumps(normalize_samples(entry["quaternions"])),
                normalize_note(entry.get("note")),
            ))
            positions.append(index)

        if not prepared:
            raise ValidationError(
                "All data entries in the batch were invalid.",
                details="; ".join(f"[{f.index}] {f.message}" for f in failures)
            )

        outcomes = self.readings.bulk_create_readings(prepared)

        stored = 0
        for index, outcome in zip(positions, outcomes):
            if outcome.success:
                stored += 1
                continue
            error = outcome.error or "Unknown store batch error"
            logger.error(f"INGESTION: Store insert error for device {device}, entry {index}: {error}")
            failures.append(IngestFailure(
                index=index,
                timestamp=entries[index]["timestamp"],
                reason="store_error",
                message=error,
            ))

        failures.sort(key=lambda f: f.index)
        skipped = len(entries) - len(prepared)

        if not failures:
            logger.info(f"INGESTION: Batch inserted {stored} records for device: {device}")
            return IngestResult(
                status=IngestStatus.STORED,
                device=device,
                submitted=len(entries),
                stored=stored,
                skipped=0,
                message=f"Batch data ingested successfully. {stored} records stored.",
            )

        logger.error(
            f"INGESTION: Batch partially failed for device {device}: "
            f"{stored} stored, {skipped} skipped, {len(prepared) - stored} rejected by store"
        )
        return IngestResult(
            status=IngestStatus.PARTIAL,
            device=device,
            submitted=len(entries),
            stored=stored,
            skipped=skipped,
            errors=failures,
            message=(
                f"Batch data ingestion partially failed. "
                f"{stored} records stored out of {len(entries)}."
            ),
        )
