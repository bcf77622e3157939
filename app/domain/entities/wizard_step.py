from enum import Enum


class WizardStep(str, Enum):
    lesson_selection = "lesson_selection"
    driving_calendar = "driving_calendar"
    teori_sessions = "teori_sessions"
    gear_selection = "gear_selection"
    student_selection = "student_selection"
    guest_registration = "guest_registration"
    supervisor_management = "supervisor_management"
    confirmation = "confirmation"
