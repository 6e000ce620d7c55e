"""Pydantic request/response models for the attrmatrix API."""
