"""Access to the upstream page workspace."""
