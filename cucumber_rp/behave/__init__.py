"""behave integration for cucumber-rp."""
