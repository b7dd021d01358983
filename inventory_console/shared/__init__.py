"""Shared cross-cutting helpers: request context and telemetry."""
