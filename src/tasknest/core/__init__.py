"""Settings and logging shared by every layer."""
