"""Process-wide runtime services: settings and telemetry."""
