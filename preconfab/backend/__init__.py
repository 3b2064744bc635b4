"""preconfab backends: HDL exporters and model checks."""
