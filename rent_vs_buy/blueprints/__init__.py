"""HTTP blueprints for the planner API."""
