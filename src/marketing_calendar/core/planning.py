"""Lead-time guidance for anchor events such as holidays and cultural moments."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Optional, Tuple

from ..domain import Channel, EventCategory

CAMPAIGN_TAIL_DAYS = 3


@dataclass(frozen=True)
class PlanningPrompt:
    categories: Tuple[EventCategory, ...]
    lead_time_days: int
    brief_deadline_days: int
    assets_deadline_days: int
    suggested_channels: Tuple[Channel, ...]
    creative_angle: str
    title: str
    description: str
    title_keywords: Tuple[str, ...] = ()
    offer_pattern: Optional[str] = None

    def matches_title(self, title: str) -> bool:
        lowered = title.lower()
        return any(keyword.lower() in lowered for keyword in self.title_keywords)


@dataclass(frozen=True)
class CampaignDates:
    campaign_start: date
    campaign_end: date
    brief_deadline: date
    assets_deadline: date

    def to_dict(self) -> Dict[str, str]:
        return {
            "campaign_start": self.campaign_start.isoformat(),
            "campaign_end": self.campaign_end.isoformat(),
            "brief_deadline": self.brief_deadline.isoformat(),
            "assets_deadline": self.assets_deadline.isoformat(),
        }


_GIFTING = (Channel.META, Channel.GOOGLE, Channel.CRM)

PLANNING_PROMPTS: Tuple[PlanningPrompt, ...] = (
    PlanningPrompt(
        categories=(EventCategory.PUBLIC_HOLIDAY,),
        title_keywords=("Christmas", "Day of Goodwill"),
        lead_time_days=42,
        brief_deadline_days=35,
        assets_deadline_days=21,
        suggested_channels=(Channel.META, Channel.GOOGLE, Channel.CRM, Channel.YOUTUBE),
        creative_angle="Gifting, family togetherness, celebration, end-of-year deals",
        offer_pattern="Bundle deals, gift guides, free shipping, extended returns",
        title="Festive Season Campaign",
        description="Peak retail period. Start prospecting early and ramp up retargeting closer to the date.",
    ),
    PlanningPrompt(
        categories=(EventCategory.PUBLIC_HOLIDAY,),
        title_keywords=("Black Friday", "Cyber Monday"),
        lead_time_days=28,
        brief_deadline_days=21,
        assets_deadline_days=14,
        suggested_channels=(Channel.META, Channel.GOOGLE, Channel.CRM, Channel.TIKTOK),
        creative_angle="Urgency, limited time, biggest savings of the year",
        offer_pattern="Deep discounts, flash sales, early access for VIPs",
        title="Black Friday / Cyber Monday",
        description="Highest competition period. Build email lists in advance. Launch teasers 1 week before.",
    ),
    PlanningPrompt(
        categories=(EventCategory.PUBLIC_HOLIDAY,),
        title_keywords=("Women's Day",),
        lead_time_days=21,
        brief_deadline_days=14,
        assets_deadline_days=7,
        suggested_channels=(Channel.META, Channel.GOOGLE, Channel.INFLUENCERS),
        creative_angle="Empowerment, self-care, celebration of women",
        offer_pattern="Gift sets, pampering packages, donation tie-ins",
        title="Women's Day Campaign",
        description="Focus on beauty, wellness, and empowerment themes. Consider influencer partnerships.",
    ),
    PlanningPrompt(
        categories=(EventCategory.PUBLIC_HOLIDAY,),
        title_keywords=("Heritage Day",),
        lead_time_days=21,
        brief_deadline_days=14,
        assets_deadline_days=7,
        suggested_channels=(Channel.META, Channel.GOOGLE, Channel.YOUTUBE),
        creative_angle="SA pride, braai culture, outdoor gatherings, diverse heritage",
        offer_pattern="Braai bundles, outdoor gear, proudly SA products",
        title="Heritage Day / Braai Day",
        description="Celebrate SA culture. Great for food, outdoor, and lifestyle brands.",
    ),
    PlanningPrompt(
        categories=(EventCategory.PUBLIC_HOLIDAY,),
        title_keywords=("Youth Day",),
        lead_time_days=21,
        brief_deadline_days=14,
        assets_deadline_days=7,
        suggested_channels=(Channel.META, Channel.TIKTOK, Channel.INFLUENCERS),
        creative_angle="Youth empowerment, education, opportunity, fresh perspectives",
        offer_pattern="Student discounts, youth-focused products",
        title="Youth Day Campaign",
        description="Target Gen Z. Consider TikTok-first creative and youth influencers.",
    ),
    PlanningPrompt(
        categories=(EventCategory.BACK_TO_SCHOOL,),
        lead_time_days=28,
        brief_deadline_days=21,
        assets_deadline_days=14,
        suggested_channels=_GIFTING,
        creative_angle="New beginnings, preparation, getting ahead",
        offer_pattern="Bundle deals on essentials, checklist-based shopping",
        title="Back to School",
        description="Target parents 3-4 weeks before. Stationery, uniforms, lunch boxes, bags.",
    ),
    PlanningPrompt(
        categories=(EventCategory.CULTURE,),
        title_keywords=("Valentine's Day",),
        lead_time_days=21,
        brief_deadline_days=14,
        assets_deadline_days=7,
        suggested_channels=_GIFTING,
        creative_angle="Romance, appreciation, treating someone special",
        offer_pattern="Gift sets, experiences, delivery guarantees",
        title="Valentine's Day",
        description="Target gift buyers. Jewelry, flowers, dining, experiences.",
    ),
    PlanningPrompt(
        categories=(EventCategory.CULTURE,),
        title_keywords=("Mother's Day",),
        lead_time_days=21,
        brief_deadline_days=14,
        assets_deadline_days=7,
        suggested_channels=_GIFTING,
        creative_angle="Appreciation, pampering, making mom feel special",
        offer_pattern="Gift sets, spa packages, personalized items",
        title="Mother's Day",
        description="Key gifting moment. Flowers, beauty, experiences, home goods.",
    ),
    PlanningPrompt(
        categories=(EventCategory.CULTURE,),
        title_keywords=("Father's Day",),
        lead_time_days=21,
        brief_deadline_days=14,
        assets_deadline_days=7,
        suggested_channels=_GIFTING,
        creative_angle="Appreciation, quality time, practical gifts",
        offer_pattern="Tech bundles, experience gifts, premium items",
        title="Father's Day",
        description="Target gift buyers. Tech, outdoor gear, experiences, apparel.",
    ),
    PlanningPrompt(
        categories=(EventCategory.CULTURE,),
        title_keywords=("Easter",),
        lead_time_days=21,
        brief_deadline_days=14,
        assets_deadline_days=7,
        suggested_channels=(Channel.META, Channel.GOOGLE),
        creative_angle="Family time, long weekend, chocolate and treats",
        offer_pattern="Chocolate bundles, travel deals, family activities",
        title="Easter Weekend",
        description="Long weekend opportunity. Travel, confectionery, family activities.",
    ),
    PlanningPrompt(
        categories=(EventCategory.SEASON,),
        title_keywords=("Festive",),
        lead_time_days=35,
        brief_deadline_days=28,
        assets_deadline_days=21,
        suggested_channels=(Channel.META, Channel.GOOGLE, Channel.CRM, Channel.YOUTUBE),
        creative_angle="Holiday spirit, gifting, family gatherings, year-end celebration",
        offer_pattern="Holiday bundles, gift guides, free shipping",
        title="Festive Season",
        description="Peak retail window. Plan campaigns across the entire period.",
    ),
    # Generic fallback for public holidays.
    PlanningPrompt(
        categories=(EventCategory.PUBLIC_HOLIDAY,),
        lead_time_days=14,
        brief_deadline_days=10,
        assets_deadline_days=5,
        suggested_channels=(Channel.META, Channel.GOOGLE),
        creative_angle="Celebration, relaxation, time off",
        title="Public Holiday",
        description="Consider if this holiday is relevant for your brand and audience.",
    ),
)


def find_planning_prompt(category: EventCategory, title: str) -> Optional[PlanningPrompt]:
    candidates = [prompt for prompt in PLANNING_PROMPTS if category in prompt.categories]
    for prompt in candidates:
        if prompt.title_keywords and prompt.matches_title(title):
            return prompt
    for prompt in candidates:
        if not prompt.title_keywords:
            return prompt
    return None


def calculate_campaign_dates(event_date: date, prompt: PlanningPrompt) -> CampaignDates:
    return CampaignDates(
        campaign_start=event_date - timedelta(days=prompt.lead_time_days),
        campaign_end=event_date + timedelta(days=CAMPAIGN_TAIL_DAYS),
        brief_deadline=event_date - timedelta(days=prompt.brief_deadline_days),
        assets_deadline=event_date - timedelta(days=prompt.assets_deadline_days),
    )
