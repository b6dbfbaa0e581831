"""
CLERK - Cover Letter Extraction and Resume Kit

A deterministic rule engine that turns unstructured job pages and resume text
into structured records for cover letter generation.

Architecture:
- Intake Context: Job posting extraction from arbitrary web pages
- Resume Context: Resume text structuring via section and pattern heuristics
- Composition Context: Formatting structured data into generation prompts
"""

__version__ = "0.1.0"
