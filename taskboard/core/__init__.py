"""Cross-cutting building blocks shared by the feature packages."""
