"""Services around the diff engine: settings, file I/O and export."""
