"""Agency Oracle - predictive simulation engine for agency finances and staffing."""
