"""Live transit vehicle map: refresh scheduling and viewport filtering."""
