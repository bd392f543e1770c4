"""Export and dataset loading for rankmedian."""

from rankmedian.persistence.dataset import load_dataset
from rankmedian.persistence.export import (
    export_csv,
    export_json,
    export_markdown,
    export_records,
)

__all__ = [
    "export_csv",
    "export_json",
    "export_markdown",
    "export_records",
    "load_dataset",
]
