"""Cross-cutting helpers shared by every layer (context, enums, telemetry, utils)."""
