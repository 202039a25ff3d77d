"""Prompt templates: renders preferences and conversations into model instructions."""

from collections.abc import Sequence

from triponic.schemas.conversation import Message
from triponic.schemas.preference import PreferenceFields
from triponic.services.conversation_window import render_transcript

NOT_SPECIFIED = "Not specified"

ITINERARY_SYSTEM_PROMPT = """You are an expert travel planner. Create a detailed travel itinerary based on the following preferences:
Destination type: {destination_type}
Custom destination: {custom_destination}
Duration: {duration} days
Budget: {budget}
Interests: {interests}
Pace: {pace}
Companions: {companions}
Activities: {activities}
Meal preferences: {meal_preferences}
Dietary restrictions: {dietary_restrictions}
Accommodation type: {accommodation}
Transportation mode: {transportation_mode}

IMPORTANT: You MUST generate exactly {duration} days of activities. Each day MUST include morning, afternoon, and evening activities.
Do not abbreviate or summarize the itinerary.

The response MUST be a valid JSON object with the following structure:
{{
  "title": "string",
  "destination": "string",
  "duration": "string",
  "summary": "string",
  "tripOverview": {{
    "budget": "string",
    "pace": "string",
    "travelStyle": "string"
  }},
  "days": [
    {{
      "dayNumber": "number",
      "title": "string",
      "morning": {{"activity": "string", "description": "string"}},
      "afternoon": {{"activity": "string", "description": "string"}},
      "evening": {{"activity": "string", "description": "string"}},
      "travelTips": ["string"],
      "image": "string (Unsplash URL)"
    }}
  ],
  "accommodations": [
    {{
      "name": "string",
      "rating": "number",
      "priceRange": "string",
      "description": "string",
      "type": "string",
      "image": "string (Unsplash URL)"
    }}
  ]
}}"""

DEFAULT_ITINERARY_REQUEST = "Generate a detailed travel itinerary based on my preferences."

CHAT_SYSTEM_PROMPT = """You are a helpful travel assistant helping a user plan their trip.

The user has these travel preferences:
Destination type: {destination_type}
Custom destination: {custom_destination}
Duration: {duration}
Budget: {budget}
Interests: {interests}
Pace: {pace}
Companions: {companions}
Activities: {activities}
Meal Preferences: {meal_preferences}
Dietary Restrictions: {dietary_restrictions}
Accommodation Type: {accommodation}
Transportation Mode: {transportation_mode}

Provide helpful, friendly advice for their trip planning. Ask follow-up questions to gather more details about their interests, preferred activities, must-see attractions, dietary preferences, and any specific requirements. Your goal is to collect enough information to create a personalized travel itinerary.
Keep responses conversational, concise, and focused on helping the user plan their perfect trip. You work for Triponic, an AI-powered travel assistant."""

EXTRACTION_SYSTEM_PROMPT = """You are an expert travel assistant. Analyze the user's natural language input and extract structured travel preferences.
Extract the following information if present:
- destinationType: one of beach, city, mountains, culture, adventure, countryside
- customDestination: specific location or country
- duration: one of weekend, short, standard, long
- startDate / endDate: calendar dates as YYYY-MM-DD, only if stated
- budget: one of budget, midrange, luxury
- interests: free text
- pace: one of relaxed, moderate, active
- companions: one of solo, couple, family, friends, group
- activities: free text
- mealPreferences: one of local, fine-dining, street-food, international
- dietaryRestrictions: one of none, vegetarian, vegan, gluten-free, dairy-free, halal, kosher
- accommodation: one of hotel, resort, vacation-rental, boutique, hostel, camping
- transportationMode: one of rental-car, public-transit, walking-biking, guided-tours, ride-services
- notes: any additional notes

Output ONLY a JSON object with these fields. If information is not present, don't include the field. Do not guess."""


def _value(value) -> str:
    if value is None or value == "":
        return NOT_SPECIFIED
    return str(value)


def _preference_values(preference: PreferenceFields) -> dict[str, str]:
    return {
        "destination_type": _value(preference.destination_type),
        "custom_destination": _value(preference.custom_destination),
        "duration": _value(preference.duration),
        "budget": _value(preference.budget),
        "interests": _value(preference.interests),
        "pace": _value(preference.pace),
        "companions": _value(preference.companions),
        "activities": _value(preference.activities),
        "meal_preferences": _value(preference.meal_preferences),
        "dietary_restrictions": _value(preference.dietary_restrictions),
        "accommodation": _value(preference.accommodation),
        "transportation_mode": _value(preference.transportation_mode),
    }


def itinerary_system_prompt(preference: PreferenceFields, duration: int) -> str:
    """System instruction for synthesis; ``duration`` overrides the free-text field."""
    values = _preference_values(preference)
    values["duration"] = str(duration)
    return ITINERARY_SYSTEM_PROMPT.format(**values)


def itinerary_user_prompt(messages: Sequence[Message]) -> str:
    if not messages:
        return DEFAULT_ITINERARY_REQUEST
    return "Additional context from conversation:\n" + render_transcript(messages)


def chat_system_prompt(preference: PreferenceFields) -> str:
    return CHAT_SYSTEM_PROMPT.format(**_preference_values(preference))
