"""Band allocation API: wristband numbers assigned to people, zones and communities."""
