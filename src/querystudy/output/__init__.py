"""Output layer: render ServiceResult as JSON, quiet lines, or Rich text."""
