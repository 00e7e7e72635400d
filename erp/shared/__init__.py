"""Cross-cutting helpers: enums, identity resolution, logging, utilities."""
