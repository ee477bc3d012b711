"""Interactive commit triage for contributing template changes back upstream."""
