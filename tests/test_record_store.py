"""Tests for the record store."""

import json
from unittest.mock import Mock, patch

import pytest
import requests

from te_gene_db.error_handler import LoadFailure, StoreAlreadyLoaded, StoreNotLoaded
from te_gene_db.models import GeneRecord
from te_gene_db.record_store import (
    RecordStore, StoreState, default_records_path, parse_records,
)


class TestParseRecords:
    """Test cases for payload parsing."""

    def test_parse_list_of_objects(self, sample_dicts):
        records = parse_records(json.dumps(sample_dicts))

        assert [r.gene_name for r in records] == ["APOE", "TREM2", "VEGFA"]

    def test_absent_and_null_fields(self, sample_dicts):
        records = parse_records(json.dumps(sample_dicts))

        assert records[1].disease is None
        assert records[2].variant is None

    def test_empty_string_preserved(self):
        records = parse_records('[{"gene_name": "APP", "variant": ""}]')
        assert records[0].variant == ""

    def test_unknown_keys_ignored(self):
        records = parse_records(b'[{"gene_name": "APP", "pubmed": "123"}]')
        assert records[0] == GeneRecord(gene_name="APP")

    def test_rejects_non_array(self):
        with pytest.raises(ValueError):
            parse_records('{"gene_name": "APP"}')

    def test_rejects_non_object_entries(self):
        with pytest.raises(ValueError):
            parse_records('[{"gene_name": "APP"}, "PSEN1"]')

    def test_rejects_bad_json(self):
        with pytest.raises(ValueError):
            parse_records('[{"gene_name": ')


class TestRecordStore:
    """Test cases for load-once store behaviour."""

    def test_initially_unloaded(self):
        store = RecordStore()

        assert store.state == StoreState.UNLOADED
        assert not store.is_loaded
        with pytest.raises(StoreNotLoaded):
            store.records

    def test_load_text(self, sample_dicts):
        store = RecordStore()
        records = store.load_text(json.dumps(sample_dicts))

        assert store.is_loaded
        assert store.records == records
        assert isinstance(store.records, tuple)
        assert len(store) == 3

    def test_parse_failure_leaves_no_records(self):
        store = RecordStore()

        with pytest.raises(LoadFailure) as exc_info:
            store.load_text("not json", source="alzheimers_data.json")

        assert store.state == StoreState.FAILED
        assert store.load_error is exc_info.value
        assert exc_info.value.source == "alzheimers_data.json"
        with pytest.raises(StoreNotLoaded):
            store.records

    def test_load_only_once(self, sample_dicts):
        store = RecordStore()
        store.load_text(json.dumps(sample_dicts))

        with pytest.raises(StoreAlreadyLoaded):
            store.load_text(json.dumps(sample_dicts))

    def test_failed_store_cannot_reload(self, sample_dicts):
        store = RecordStore()
        with pytest.raises(LoadFailure):
            store.load_text("[")

        with pytest.raises(StoreAlreadyLoaded):
            store.load_text(json.dumps(sample_dicts))

    def test_load_path(self, sample_data_file):
        store = RecordStore()
        store.load_path(sample_data_file)

        assert [r.gene_name for r in store.records] == ["APOE", "TREM2", "VEGFA"]
        assert store.source == str(sample_data_file)

    def test_load_missing_file(self, temp_dir):
        store = RecordStore()

        with pytest.raises(LoadFailure):
            store.load_path(temp_dir / "missing.json")
        assert store.state == StoreState.FAILED

    def test_load_csv_export(self, temp_dir):
        path = temp_dir / "export.csv"
        path.write_text(
            'Gene Name,Variant,TE Relevance\n'
            '"APOE","ε4","Neural tissue engineering"\n'
            '"CLU","",""\n',
            encoding="utf-8"
        )

        store = RecordStore()
        store.load_path(path)

        assert store.records[0] == GeneRecord(
            gene_name="APOE", variant="ε4", te_relevance="Neural tissue engineering"
        )
        assert store.records[1] == GeneRecord(gene_name="CLU")

    def test_load_tsv_with_field_names(self, temp_dir):
        path = temp_dir / "catalog.tsv"
        path.write_text("gene_name\tcell_type\nTREM2\tMicroglia\n", encoding="utf-8")

        store = RecordStore()
        store.load_path(path)

        assert store.records == (GeneRecord(gene_name="TREM2", cell_type="Microglia"),)

    def test_load_csv_without_known_columns(self, temp_dir):
        path = temp_dir / "other.csv"
        path.write_text("a,b\n1,2\n", encoding="utf-8")

        with pytest.raises(LoadFailure):
            RecordStore().load_path(path)

    def test_load_bundled_catalog(self):
        store = RecordStore()
        store.load()

        assert default_records_path().exists()
        assert len(store) > 10
        assert any(r.gene_name == "APOE" for r in store.records)


class TestLoadUrl:
    """Test cases for URL sources."""

    URL = "https://example.org/alzheimers_data.json"

    def test_load_url(self, sample_dicts):
        response = Mock()
        response.content = json.dumps(sample_dicts).encode()
        response.raise_for_status.return_value = None

        with patch('te_gene_db.record_store.requests.Session') as mock_session:
            mock_session.return_value.get.return_value = response
            store = RecordStore(timeout_seconds=5)
            store.load(self.URL)

        mock_session.return_value.get.assert_called_once_with(self.URL, timeout=5)
        assert len(store.records) == 3

    def test_http_error_is_load_failure(self):
        response = Mock()
        response.raise_for_status.side_effect = requests.exceptions.HTTPError("404 Not Found")

        with patch('te_gene_db.record_store.requests.Session') as mock_session:
            mock_session.return_value.get.return_value = response
            store = RecordStore()
            with pytest.raises(LoadFailure) as exc_info:
                store.load_url(self.URL)

        assert "404" in str(exc_info.value)
        assert store.state == StoreState.FAILED

    def test_connection_error_is_load_failure(self):
        with patch('te_gene_db.record_store.requests.Session') as mock_session:
            mock_session.return_value.get.side_effect = requests.exceptions.ConnectionError("refused")
            store = RecordStore()
            with pytest.raises(LoadFailure):
                store.load_url(self.URL)

        assert not store.is_loaded

    def test_unparseable_response(self):
        response = Mock()
        response.content = b"<html>error</html>"
        response.raise_for_status.return_value = None

        with patch('te_gene_db.record_store.requests.Session') as mock_session:
            mock_session.return_value.get.return_value = response
            with pytest.raises(LoadFailure):
                RecordStore().load_url(self.URL)
