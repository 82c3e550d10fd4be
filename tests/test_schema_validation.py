"""Tests for schema validation of the snapshot record."""

import json
from pathlib import Path

import jsonschema
import pytest

from deltaenv.env import DeltaEnv, Pagers


SCHEMAS_DIR = Path(__file__).parent.parent / "schemas"


def load_schema(name: str) -> dict:
    """Load a schema by name."""
    path = SCHEMAS_DIR / f"{name}.schema.json"
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


class TestEnvSchema:
    """Tests for env.schema.json."""

    def test_live_snapshot_validates(self, env_access):
        env_access.setenv("PAGER", '/bin/sh -c "head -10000 | cat"')
        env_access.setenv("DELTA_FEATURES", "side-by-side")

        record = DeltaEnv.init(["/usr/bin/delta"]).to_dict()

        jsonschema.validate(record, load_schema("env"))

    def test_default_snapshot_validates(self):
        """A bare DeltaEnv already carries the default fallback pager."""
        jsonschema.validate(DeltaEnv().to_dict(), load_schema("env"))

    def test_missing_fallback_fails(self):
        """A snapshot without a resolved fallback pager is invalid."""
        record = DeltaEnv().to_dict()
        record["pagers"]["fallback"] = None

        with pytest.raises(jsonschema.ValidationError):
            jsonschema.validate(record, load_schema("env"))

    def test_populated_snapshot_validates(self):
        record = DeltaEnv(
            bat_theme="Nord",
            current_dir=Path("/work"),
            hostname="build-01",
            pagers=Pagers("bat", "less"),
        ).to_dict()

        jsonschema.validate(record, load_schema("env"))

    def test_missing_required_fails(self):
        record = {"schema_name": "deltaenv.env", "schema_version": 1}

        with pytest.raises(jsonschema.ValidationError):
            jsonschema.validate(record, load_schema("env"))

    def test_unknown_fields_allowed(self):
        record = DeltaEnv(pagers=Pagers(None, "less")).to_dict()
        record["future_field"] = "some_value"

        jsonschema.validate(record, load_schema("env"))
