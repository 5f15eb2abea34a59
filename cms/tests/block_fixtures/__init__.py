"""Block types used by the registry tests."""
