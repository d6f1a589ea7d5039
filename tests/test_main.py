"""
Tests for the command line entry point and result output.
"""
import json

import yaml

from catalog_ingest.common.errors import UnhandledInputError
from catalog_ingest.common.io_utils import serialize_read_result, write_read_result
from catalog_ingest.common.results import (
    LocationSpec, ReadLocationEntity, ReadLocationError, ReadLocationResult,
)
from catalog_ingest.main import main

from catalog_fixtures import component


def read_jsonl(path):
    with open(path, 'r') as f:
        return [json.loads(line) for line in f if line.strip()]


class TestSerialization:
    """Test JSONL output of read results."""
    
    def test_serialize_read_result(self):
        """Test that entities and errors become plain records."""
        location = LocationSpec("file", "/catalog.yaml")
        read_result = ReadLocationResult(
            entities=[ReadLocationEntity(entity=component("web"), location=location)],
            errors=[ReadLocationError(location=location, error=UnhandledInputError("nothing read it"))],
        )
        
        entity_records, error_records = serialize_read_result(read_result)
        
        assert entity_records == [{"location": "file:/catalog.yaml", "entity": component("web")}]
        assert error_records == [{
            "location": "file:/catalog.yaml",
            "error": "UnhandledInputError",
            "message": "nothing read it",
        }]
    
    def test_write_read_result(self, tmp_path):
        """Test that both files are written, even when empty."""
        entities_path, errors_path = write_read_result(ReadLocationResult(), tmp_path / "out")
        
        assert read_jsonl(entities_path) == []
        assert read_jsonl(errors_path) == []


class TestMain:
    """Test the read command."""
    
    def test_no_command(self):
        """Test that running without a command fails."""
        assert main([]) == 1
    
    def test_read_file_catalog(self, tmp_path):
        """Test reading a catalog file through a configured reader."""
        catalog = tmp_path / "catalog.yaml"
        catalog.write_text(yaml.safe_dump_all([component("web"), component("api")]))
        config_file = tmp_path / "app-config.yaml"
        config_file.write_text("catalog:\n  processors:\n    - catalog_fixtures:LocalFileReader\n")
        out_dir = tmp_path / "out"
        
        exit_code = main([
            "read", "--type", "file", "--target", str(catalog),
            "--config", str(config_file), "--output-dir", str(out_dir),
        ])
        
        assert exit_code == 0
        entities = read_jsonl(out_dir / "entities.jsonl")
        assert [record["entity"]["metadata"]["name"] for record in entities] == ["web", "api"]
        assert read_jsonl(out_dir / "errors.jsonl") == []
    
    def test_read_catalog_with_dates(self, tmp_path):
        """Test that YAML dates are written as strings instead of failing the read."""
        catalog = tmp_path / "catalog.yaml"
        catalog.write_text(
            "apiVersion: catalog.io/v1\nkind: Component\n"
            "metadata:\n  name: web\nspec:\n  created: 2020-01-01\n"
        )
        config_file = tmp_path / "app-config.yaml"
        config_file.write_text("catalog:\n  processors:\n    - catalog_fixtures:LocalFileReader\n")
        out_dir = tmp_path / "out"
        
        exit_code = main([
            "read", "--type", "file", "--target", str(catalog),
            "--config", str(config_file), "--output-dir", str(out_dir),
        ])
        
        assert exit_code == 0
        entities = read_jsonl(out_dir / "entities.jsonl")
        assert entities[0]["entity"]["spec"]["created"] == "2020-01-01"
    
    def test_unreadable_location(self, tmp_path):
        """Test that recorded errors give a failing exit code."""
        out_dir = tmp_path / "out"
        
        exit_code = main(["read", "--type", "git", "--target", "repo", "--output-dir", str(out_dir)])
        
        assert exit_code == 1
        errors = read_jsonl(out_dir / "errors.jsonl")
        assert [record["error"] for record in errors] == ["UnhandledInputError"]
        assert errors[0]["location"] == "git:repo"
    
    def test_invalid_config(self, tmp_path):
        """Test that a broken config file fails before reading."""
        config_file = tmp_path / "app-config.yaml"
        config_file.write_text("catalog:\n  processors:\n    - not-a-path\n")
        
        assert main(["read", "--type", "file", "--target", "/x.yaml", "--config", str(config_file)]) == 1
