#!/usr/bin/env python3
"""Validate vehicle mileage YAML files against the schema."""
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError

from mileage.loader import USER_SETTINGS_FILE


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def _quote_dates(data):
    """YAML reads unquoted dates as date objects; the schema expects strings."""
    for entry in (data or {}).get("mileageLogs") or []:
        if isinstance(entry, dict) and "date" in entry and not isinstance(entry["date"], str):
            entry["date"] = str(entry["date"])
    return data


def validate_vehicle_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single vehicle YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = _quote_dates(yaml.safe_load(f))
        validate(instance=data, schema=schema)
        ids = [e["id"] for e in data.get("mileageLogs") or []]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            errors.append(f"Duplicate mileage log ids: {', '.join(duplicates)}")
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except Exception as e:
        errors.append(f"Error: {e}")
    return errors


def main():
    """Validate all vehicle YAML files in the vehicles/ directory."""
    schema = load_schema()
    vehicles_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(__file__).parent / "vehicles"

    if not vehicles_dir.exists():
        print(f"Error: vehicles directory not found: {vehicles_dir}")
        return 1

    yaml_files = [
        p for p in list(vehicles_dir.glob("*.yaml")) + list(vehicles_dir.glob("*.yml"))
        if p.name != USER_SETTINGS_FILE
    ]

    if not yaml_files:
        print(f"Warning: No YAML files found in {vehicles_dir}")
        return 0

    all_valid = True
    for filepath in sorted(yaml_files):
        errors = validate_vehicle_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
