# Messages renvoyés dans l'enveloppe


class AuthMessages:
    REGISTERED = "User registered successfully"
    LOGGED_IN = "Login successful"
    GOOGLE_SIGNED_IN = "Google sign-in successful"
    LOGGED_OUT = "Logged out successfully"
    PROFILE_RETRIEVED = "Profile retrieved successfully"
    PROFILE_UPDATED = "Profile updated successfully"
    PASSWORD_CHANGED = "Password changed successfully"
    EMAIL_TAKEN = "User with this email already exists"
    INVALID_CREDENTIALS = "Invalid email or password"
    ACCOUNT_DEACTIVATED = "Account is deactivated"
    CURRENT_PASSWORD_INCORRECT = "Current password is incorrect"
    TOKEN_MISSING = "Access denied. No token provided."
    TOKEN_INVALID = "Invalid or expired token"
    USER_NOT_FOUND = "User not found or inactive"


class TaskMessages:
    CREATED = "Task created successfully"
    LISTED = "Tasks retrieved successfully"
    RETRIEVED = "Task retrieved successfully"
    UPDATED = "Task updated successfully"
    DELETED = "Task deleted successfully"
    TOGGLED = "Task completion toggled successfully"
    OVERDUE = "Overdue tasks retrieved successfully"
    UPCOMING = "Upcoming tasks retrieved successfully"
    STATS = "Task statistics retrieved successfully"
    BULK_UPDATED = "{0} tasks updated successfully"
    BULK_DELETED = "{0} tasks deleted successfully"
    NOT_FOUND = "Task not found"


class UserMessages:
    PROFILE_RETRIEVED = "User profile retrieved successfully"
    STATS = "User statistics retrieved successfully"
    ACTIVITY = "User activity retrieved successfully"
    ACCOUNT_DELETED = "Account deleted successfully"
    PASSWORD_INCORRECT = "Password is incorrect"


class ApiMessages:
    VALIDATION_FAILED = "Validation failed"
    SERVER_ERROR = "Something went wrong!"
    ROUTE_NOT_FOUND = "Route not found"
    HEALTHY = "TaskManager API is running"
