"""Status documents returned by the JSON endpoints.

Each builder is a pure function of the current time and settings; the
club and module descriptions are fixed literals.
"""

from datetime import datetime

from clubpro.config import Settings

SERVICE_NAME = "Soccer Club Pro"
CLUB_NAME = "VVC Brasschaat"
PRIMARY_COLOR = "#232e5d"
SECONDARY_COLOR = "#4a90e2"

FEATURES = [
    "Professional Tactical Pad",
    "IADATABANK Training System (144 elementen)",
    "Jaarplanning Calendar met PDF export",
    "Players Database met Excel upload",
    "Database Scouting met CRUD operaties",
    "User Management met email uitnodigingen",
    "One.com mailserver integratie",
    "Role-based access control",
]

SUBSYSTEMS = (
    "tactical_pad",
    "iadatabank",
    "jaarplanning",
    "players_database",
    "scouting_database",
    "user_management",
)

MODULE_DESCRIPTIONS = {
    "tactical_pad": "Professional drawing tools with formation systems",
    "iadatabank": "144 training elements across 4 categories",
    "jaarplanning": "Calendar with PDF export (JAARPLANNING-[team].pdf)",
    "players_database": "Excel upload functionality",
    "scouting_database": "Full CRUD operations",
    "user_management": "Email invitations with One.com integration",
}

CAPABILITIES = {
    "tactical_analysis": "Industry-standard tactical pad",
    "training_methodology": "Complete IADATABANK system",
    "planning": "Professional year planning with PDF export",
    "player_management": "Comprehensive database with Excel integration",
    "scouting": "Advanced scouting database",
    "administration": "Complete user management system",
}


def isoformat(now: datetime) -> str:
    """ISO 8601 with microsecond precision and a ``Z`` suffix."""
    return now.isoformat(timespec="microseconds").replace("+00:00", "Z")


def root_info(now: datetime, settings: Settings) -> dict:
    return {
        "message": f"{SERVICE_NAME} API - {CLUB_NAME}",
        "status": "operational",
        "version": settings.APP_VERSION,
        "timestamp": isoformat(now),
        "features": list(FEATURES),
        "club": {
            "name": CLUB_NAME,
            "colors": f"{PRIMARY_COLOR}, {SECONDARY_COLOR}",
            "system": "Professional Soccer Management",
        },
    }


def health(now: datetime, settings: Settings) -> dict:
    # Presence of the connection string only; reachability is never checked.
    return {
        "status": "healthy",
        "timestamp": isoformat(now),
        "database": "connected" if settings.database_configured else "not configured",
        "services": {name: "operational" for name in SUBSYSTEMS},
    }


def deployment_status(now: datetime, settings: Settings) -> dict:
    return {
        "service": SERVICE_NAME,
        "club": CLUB_NAME,
        "status": "deployed",
        "environment": settings.NODE_ENV or "production",
        "deployment": "vercel",
        "timestamp": isoformat(now),
        "database": {
            "status": "available" if settings.database_configured else "pending",
        },
        "modules": dict(MODULE_DESCRIPTIONS),
    }


def club_info(now: datetime, settings: Settings) -> dict:
    return {
        "club": CLUB_NAME,
        "system": SERVICE_NAME,
        "capabilities": dict(CAPABILITIES),
        "colors": {"primary": PRIMARY_COLOR, "secondary": SECONDARY_COLOR},
        "deployment": {"platform": "Vercel", "status": "Professional Grade"},
    }
