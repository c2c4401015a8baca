from .calculator import (
    ChartData,
    FieldError,
    Projection,
    SubjectMetrics,
    SubjectProjection,
    project,
    project_subject,
    semester_weeks,
    validate_configuration,
    validate_subject_input,
    weightage_chart_data,
)
from .session_service import EmptySubjectNameError, SessionService, SubjectInputError

__all__ = [
	"ChartData",
	"EmptySubjectNameError",
	"FieldError",
	"Projection",
	"SessionService",
	"SubjectInputError",
	"SubjectMetrics",
	"SubjectProjection",
	"project",
	"project_subject",
	"semester_weeks",
	"validate_configuration",
	"validate_subject_input",
	"weightage_chart_data",
]
