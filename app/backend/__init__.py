"""
ID Photo Extraction Backend Application.

A FastAPI service that validates captured ID photos and extracts
identity fields from them using a vision-capable model (OpenAI GPT-4o).
"""

__version__ = "1.0.0"
