"""Application layer: ports, adapters and the plugin resource registry."""
