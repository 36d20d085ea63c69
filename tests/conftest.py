"""Shared fixtures."""

import json
import logging
import tempfile
from pathlib import Path

import pytest

from te_gene_db.models import GeneRecord


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers bound to streams of earlier CLI invocations."""
    yield
    package_logger = logging.getLogger('te_gene_db')
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def temp_dir():
    """Create a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


SAMPLE_RECORDS = [
    {
        "gene_name": "APOE",
        "variant": "ε4",
        "disease": "Late-onset Alzheimer's disease",
        "function": "Lipid transport",
        "te_relevance": "Neural tissue engineering",
        "growth_factors": "BDNF, NGF",
    },
    {
        "gene_name": "TREM2",
        "variant": "R47H",
        "function": "Microglial receptor",
        "te_relevance": "Neuroimmune interface engineering",
        "cell_type": "iPSC-derived microglia",
    },
    {
        "gene_name": "VEGFA",
        "variant": None,
        "function": "Vascular endothelial growth factor",
        "te_relevance": "Neurovascular unit engineering",
        "growth_factors": "VEGF, PDGF-BB",
    },
]


@pytest.fixture
def sample_dicts():
    return [dict(entry) for entry in SAMPLE_RECORDS]


@pytest.fixture
def sample_records():
    return tuple(GeneRecord.from_dict(entry) for entry in SAMPLE_RECORDS)


@pytest.fixture
def sample_data_file(temp_dir):
    path = temp_dir / "alzheimers_data.json"
    path.write_text(json.dumps(SAMPLE_RECORDS), encoding="utf-8")
    return path
