"""Toy datasets in training-record form."""

from .toy import (
    xor_dataset,
    and_dataset,
    or_dataset,
    noisy_xor_dataset,
    records_from_arrays,
    DATASETS,
    get_dataset,
    list_datasets,
)

__all__ = [
    'xor_dataset',
    'and_dataset',
    'or_dataset',
    'noisy_xor_dataset',
    'records_from_arrays',
    'DATASETS',
    'get_dataset',
    'list_datasets',
]
