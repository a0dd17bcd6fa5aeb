"""Test-framework integrations for json-structural-diff."""
