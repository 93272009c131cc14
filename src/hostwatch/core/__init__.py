"""Domain models, ports and pure logic."""
