"""HTTP surface for the reading coach UI."""
