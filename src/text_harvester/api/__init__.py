"""HTTP request shell for Text Harvester."""
