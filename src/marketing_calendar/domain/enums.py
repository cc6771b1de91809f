from __future__ import annotations

from enum import Enum


class EventCategory(str, Enum):
    PUBLIC_HOLIDAY = "publicHoliday"
    SCHOOL_TERM = "schoolTerm"
    BACK_TO_SCHOOL = "backToSchool"
    SEASON = "season"
    CULTURE = "culture"
    BRAND_MOMENT = "brandMoment"
    CAMPAIGN_FLIGHT = "campaignFlight"
    KEY_DATE = "keyDate"
    DEADLINE = "deadline"


class Importance(str, Enum):
    HIGH = "high"
    MED = "med"
    LOW = "low"


class Visibility(str, Enum):
    INTERNAL = "internal"
    CLIENT = "client"


class RecurrenceFrequency(str, Enum):
    YEARLY = "yearly"


class Channel(str, Enum):
    META = "Meta"
    GOOGLE = "Google"
    TIKTOK = "TikTok"
    CRM = "CRM"
    YOUTUBE = "YouTube"
    INFLUENCERS = "Influencers"


class Objective(str, Enum):
    AWARENESS = "Awareness"
    LEADS = "Leads"
    SALES = "Sales"


MULTI_DAY_CATEGORIES = frozenset(
    {
        EventCategory.BRAND_MOMENT,
        EventCategory.CAMPAIGN_FLIGHT,
        EventCategory.DEADLINE,
    }
)

# Lower sorts first.
CATEGORY_PRIORITY = {
    EventCategory.PUBLIC_HOLIDAY: 0,
    EventCategory.DEADLINE: 1,
    EventCategory.BACK_TO_SCHOOL: 2,
    EventCategory.SCHOOL_TERM: 3,
    EventCategory.BRAND_MOMENT: 4,
    EventCategory.CAMPAIGN_FLIGHT: 5,
    EventCategory.KEY_DATE: 6,
    EventCategory.CULTURE: 7,
    EventCategory.SEASON: 8,
}

CATEGORY_STYLES = {
    EventCategory.PUBLIC_HOLIDAY: "keydate",
    EventCategory.SCHOOL_TERM: "school",
    EventCategory.BACK_TO_SCHOOL: "school",
    EventCategory.SEASON: "season",
    EventCategory.CULTURE: "keydate",
    EventCategory.BRAND_MOMENT: "brand",
    EventCategory.CAMPAIGN_FLIGHT: "campaign",
    EventCategory.KEY_DATE: "keydate",
    EventCategory.DEADLINE: "deadline",
}
