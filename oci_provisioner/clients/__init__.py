"""Provider client packages."""
