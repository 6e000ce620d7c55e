"""HTTP middleware for the attrmatrix API."""
