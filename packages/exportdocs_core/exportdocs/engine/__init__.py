"""Layout engine: measurement, blocks, tables and pagination."""
