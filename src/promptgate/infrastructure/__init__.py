"""Infrastructure layer: API integration, persistence and providers."""
