"""Application constants."""

# Canvas API
PER_PAGE = 50
REQUEST_TIMEOUT = 30

# Course workflow state that marks a course as active
ACTIVE_WORKFLOW_STATE = "available"

# Priority scoring
DEFAULT_PRIORITY_LIMIT = 10
DEFAULT_GROUP_WEIGHT = 0
UPCOMING_MULTIPLIER = 1.5
STATUS_OVERDUE = "overdue"
STATUS_UPCOMING = "upcoming"

# Report defaults
DEFAULT_ASSIGNMENT_DAYS = 14
SUMMARY_ASSIGNMENT_DAYS = 7

# Submission type icons
SUBMISSION_TYPE_ICONS = {
    'online_quiz': '🧪',
    'discussion_topic': '💬',
}

# Report text
HEAVY_RULE = "═══════════════════════════════════════"
LIGHT_RULE = "───────────────────────────────────────"
NOTHING_ACTIONABLE_MESSAGE = "Nothing actionable found! 🎉"
NO_OVERDUE_MESSAGE = "No overdue assignments! 🎉"
NO_GRADES_MESSAGE = "No grade data available."
