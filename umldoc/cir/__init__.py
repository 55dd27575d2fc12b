"""Declaration feed consumed by the diagram builder."""
