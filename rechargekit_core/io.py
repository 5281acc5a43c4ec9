"""
rechargekit_core.io
-------------------
Lightweight persistence for raw form submissions.

Design rules
------------
- Storage knows nothing about the calculator: it saves the *inputs* as the
  user typed them, plus a UTC timestamp.
- One CSV file per data folder; pandas reads and writes it so the file opens
  straight in Excel.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from .config import FIELD_ALIASES, RechargeInputs

logger = logging.getLogger(__name__)

TIMESTAMP_COLUMN = "dateSubmitted"
SUBMISSION_COLUMNS = list(FIELD_ALIASES.values()) + [TIMESTAMP_COLUMN]


class SubmissionStore:
    """
    Append-only store of farmer submissions.

    Parameters
    ----------
    path : str | Path
        CSV file to append to. Parent folders are created on first save.
    """

    def __init__(self, path):
        self.path = Path(path)

    def save(self, inputs: RechargeInputs, submitted_at: Optional[datetime] = None) -> Dict[str, object]:
        """
        Append one submission and return the stored record.

        The timestamp defaults to "now" in UTC and is written in ISO 8601.
        I/O errors propagate; the caller decides how to report them.
        """
        when = submitted_at or datetime.now(timezone.utc)
        record: Dict[str, object] = dict(inputs.to_dict())
        record[TIMESTAMP_COLUMN] = when.isoformat()

        self.path.parent.mkdir(parents=True, exist_ok=True)
        row = pd.DataFrame([record], columns=SUBMISSION_COLUMNS)
        # Header only when creating the file
        write_header = not self.path.exists()
        row.to_csv(self.path, mode="a", header=write_header, index=False)

        logger.info("Saved submission to %s", self.path)
        return record

    def load(self) -> pd.DataFrame:
        """
        Read all submissions (oldest first).

        Returns an empty frame with the expected columns if nothing was saved yet.
        """
        if not self.path.exists():
            return pd.DataFrame(columns=SUBMISSION_COLUMNS)
        df = pd.read_csv(self.path)
        df[TIMESTAMP_COLUMN] = pd.to_datetime(df[TIMESTAMP_COLUMN], utc=True)
        return df

    def __len__(self) -> int:
        return len(self.load())
