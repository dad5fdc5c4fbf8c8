"""LabDash: research lab dashboard backend."""
