# epidash/data_processing/pipeline.py
#
# Fluent Record Pipeline
# Turns a record collection into the tabular shape the charting layer expects,
# through a chainable sequence of preparation steps.

import logging
from typing import List, Optional, Sequence

import pandas as pd

try:
    from .models import Record
except ImportError as e:
    logging.basicConfig(level="CRITICAL")
    logging.critical(f"FATAL ERROR in pipeline.py: could not import models. {e}", exc_info=True)
    raise

logger = logging.getLogger(__name__)


def records_to_frame(records: Sequence[Record], columns: Optional[List[str]] = None) -> pd.DataFrame:
    """One row per record, keyed by the Python field names."""
    rows = [record.model_dump() for record in records]
    df = pd.DataFrame(rows)
    if df.empty and columns:
        return pd.DataFrame(columns=columns)
    return df


class RecordPipeline:
    """
    A fluent interface over a DataFrame built from records.
    Every step works on a private copy; the source collection is never touched.
    """
    def __init__(self, records: Sequence[Record], columns: Optional[List[str]] = None):
        self._df = records_to_frame(records, columns)

    def get_df(self) -> pd.DataFrame:
        """Returns the processed DataFrame."""
        return self._df

    def order_categories(self, column: str, order: Sequence[str]) -> 'RecordPipeline':
        """Makes `column` an ordered categorical so charts follow the domain order."""
        if column in self._df.columns and not self._df.empty:
            self._df[column] = pd.Categorical(self._df[column], categories=list(order), ordered=True)
        return self

    def sum_by(self, column: str, value: str = 'cases') -> 'RecordPipeline':
        """Sums `value` per distinct `column`, keeping the categorical order."""
        if self._df.empty or column not in self._df.columns:
            self._df = pd.DataFrame(columns=[column, value])
            return self
        self._df = (
            self._df.groupby(column, observed=True, sort=True)[value]
            .sum().reset_index()
        )
        return self

    def to_csv(self) -> str:
        return self._df.to_csv(index=False)
