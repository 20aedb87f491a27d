# Message templates. Everything goes out with parse_mode='HTML'.

from .locations import DROP_LOCATIONS, PICKUP_LOCATIONS
from .models import MATCH_WINDOW_MINUTES


def escape_html(text):
    if text is None:
        return ""
    return str(text).replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


MAIN_MENU = (
    "<b>🚗 MIT Cab Share Connect</b>\n\n"
    "Welcome to your trusted cab sharing platform!\n\n"
    "1️⃣ <b>Find/Join Cab Share</b>\n"
    "2️⃣ <b>My Active Rides</b>\n"
    "3️⃣ <b>Share Live Location</b>\n"
    "4️⃣ <b>Help &amp; Support</b>\n\n"
    "<i>Reply with number to select</i>\n\n"
    "💡 Pro tip: Keep notifications on for instant ride matches!"
)

INVALID_MENU_OPTION = "❌ Invalid option. Please select 1-4."
INVALID_PICKUP = "❌ Invalid pickup location. Please select again:"
INVALID_DROP = "❌ Invalid drop location. Please select again:"
SOMETHING_WENT_WRONG = "❌ Something went wrong. Returning to main menu..."
CANCELLED = "Action cancelled."

DATE_PROMPT = (
    "<b>Select Travel Date</b>\n\n"
    "Enter date in YYYY-MM-DD format\n"
    "Example: 2025-01-29"
)

TIME_PROMPT = (
    "<b>Select Preferred Time</b>\n\n"
    "Enter time in 24-hour format (HH:MM)\n"
    "Example: 14:30 for 2:30 PM\n\n"
    f"<i>We'll match you with rides {MATCH_WINDOW_MINUTES} minutes before and after.</i>"
)

LIVE_LOCATION = (
    "<b>📍 Share Live Location</b>\n\n"
    "Once you are matched, share your live location in your ride group "
    "so everyone can find each other at the pickup point."
)

HELP = (
    "<b>Help &amp; Support</b>\n\n"
    "1. Choose <b>Find/Join Cab Share</b> from the menu.\n"
    "2. Pick your pickup and drop location, date and time.\n"
    f"3. We group you with riders going the same way within {MATCH_WINDOW_MINUTES} minutes.\n\n"
    "Send /cancel at any time to start over."
)


def _options(catalog):
    return "\n".join(f"{key}. {loc.label()}" for key, loc in catalog.items())


def pickup_prompt():
    return f"<b>Select Pickup Location:</b>\n\n{_options(PICKUP_LOCATIONS)}"


def drop_prompt():
    return f"<b>Select Drop Location:</b>\n\n{_options(DROP_LOCATIONS)}"


def invalid(reason):
    return f"❌ {escape_html(reason)}"


def _details(ride):
    return (
        f"📍 From: {ride.pickup.label()}\n"
        f"🎯 To: {ride.drop.label()}\n"
        f"📅 Date: {ride.date.isoformat()}\n"
        f"⏰ Time: {ride.time.strftime('%H:%M')}"
    )


def ride_created(ride):
    return (
        "✅ <b>Ride Request Created!</b>\n\n"
        "We'll notify you when we find matching riders.\n\n"
        f"<b>Your Details:</b>\n{_details(ride)}"
    )


def already_member(ride):
    return (
        "ℹ️ <b>You are already in this ride.</b>\n\n"
        f"{_details(ride)}\n"
        f"👥 Participants: {len(ride.participants)}/{ride.max_participants}"
    )


def match_found(ride):
    contacts = "\n".join(f"- {escape_html(p.contact)}" for p in ride.participants)
    return (
        "<b>🎉 Cab Share Match Found!</b>\n\n"
        f"<b>Ride Details:</b>\n{_details(ride)}\n"
        f"👥 Participants: {len(ride.participants)}/{ride.max_participants}\n\n"
        f"<b>Contact Details:</b>\n{contacts}\n\n"
        "<b>Next Steps:</b>\n"
        "1. Save contact numbers\n"
        "2. Create a group chat\n"
        "3. Share live location\n\n"
        "<i>Stay safe! Share ride details with family/friends.</i>"
    )


def my_rides(rides):
    if not rides:
        return "You have no active rides. Choose 1 to find or start one."
    blocks = [
        f"<b>Ride #{r.id}</b> ({r.status.value})\n{_details(r)}\n"
        f"👥 Participants: {len(r.participants)}/{r.max_participants}"
        for r in rides
    ]
    return "<b>Your Active Rides</b>\n\n" + "\n\n".join(blocks)
