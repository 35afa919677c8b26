"""
UI Services package.

Contains service classes for direct database access from Streamlit UI.
"""

from ui.services.assessment_ui_service import AssessmentUIService

__all__ = ["AssessmentUIService"]
