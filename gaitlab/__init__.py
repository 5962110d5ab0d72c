"""
GaitLab - session-scoped gait sensor ingestion and retrieval backend
"""
__version__ = "1.0.0"
