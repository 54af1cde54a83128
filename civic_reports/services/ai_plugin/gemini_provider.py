"""
Gemini AI Provider - Google Gemini over its REST API.

Requires GEMINI_API_KEY in environment variables.
Fails gracefully: errors are returned inside the AIResponse.
"""

from civic_reports.services.ai_plugin.base import (
    AIProvider,
    AIResponse,
    AITask,
    REPORT_CATEGORIES,
    normalize_category,
)
from civic_reports.core.settings import settings
from typing import Any, Dict, List, Optional
import logging
import json
import requests

logger = logging.getLogger(__name__)


class GeminiAIProvider(AIProvider):
    """
    Google Gemini API provider for report suggestions.

    Every call goes through _call_gemini_api; any failure (network, HTTP
    status, unexpected payload) is logged and reported in AIResponse.error.
    """

    MODEL_VERSION = "v1beta"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model = model or settings.GEMINI_MODEL
        self.enabled = bool(self.api_key and self.api_key.strip())

        if self.enabled:
            logger.info(f"✅ Gemini AI Provider initialized: {self.model}")
        else:
            logger.info("⚠️ Gemini AI Provider disabled: No API key configured")

    def is_enabled(self) -> bool:
        return self.enabled

    def get_model_info(self) -> Dict[str, str]:
        return {
            "name": self.model,
            "version": self.MODEL_VERSION
        }

    def get_timeout_seconds(self) -> float:
        return settings.AI_TIMEOUT_SECONDS

    def generate_suggestions(self, location: str) -> AIResponse:
        system_prompt = (
            "You are an assistant for a civic reporting app. Based on the user's input about a "
            "location and implied issue, generate a concise, formal title and a descriptive "
            f"paragraph for the report. The location is {settings.CITY_NAME}. Output a valid JSON "
            "object with 'title' and 'description' keys, and nothing else."
        )
        payload = {
            "contents": [{"parts": [{"text": location}]}],
            "systemInstruction": {"parts": [{"text": system_prompt}]},
            "generationConfig": {"responseMimeType": "application/json"},
        }
        try:
            parsed = _parse_json_text(self._call_gemini_api(payload))
            title = str(parsed.get("title", "")).strip()
            description = str(parsed.get("description", "")).strip()
            if not title or not description:
                raise ValueError("Gemini response missing 'title' or 'description'")
            return self._response(AITask.SUGGESTIONS, {"title": title, "description": description})
        except Exception as e:
            logger.warning(f"⚠️ Gemini suggestions failed: {e}")
            return self._response(AITask.SUGGESTIONS, {}, error=f"Gemini API error: {e}")

    def analyze_image(self, image: str) -> AIResponse:
        payload = {
            "contents": [{
                "role": "user",
                "parts": [
                    {"text": (
                        f"Analyze this image of a civic issue in {settings.CITY_NAME}. Describe the "
                        "problem in a concise, formal paragraph for a report. Do not mention that "
                        "you are looking at an image."
                    )},
                    {"inlineData": {"mimeType": "image/jpeg", "data": image}},
                ],
            }],
        }
        try:
            text = self._call_gemini_api(payload).strip()
            return self._response(AITask.IMAGE_ANALYSIS, {"description": text})
        except Exception as e:
            logger.warning(f"⚠️ Gemini image analysis failed: {e}")
            return self._response(AITask.IMAGE_ANALYSIS, {}, error=f"Gemini API error: {e}")

    def categorize_report(self, title: str, description: str) -> AIResponse:
        options = ", ".join(f'"{category}"' for category in REPORT_CATEGORIES)
        system_prompt = (
            "You are an AI classifier for a civic reporting app. Based on the report's title and "
            f"description, categorize it into one of the following options: {options}. Output a "
            'valid JSON object with only a "category" key. For example: {"category": "Waste Management"}'
        )
        payload = {
            "contents": [{"parts": [{"text": f"Title: {title}\nDescription: {description}"}]}],
            "systemInstruction": {"parts": [{"text": system_prompt}]},
            "generationConfig": {"responseMimeType": "application/json"},
        }
        try:
            text = self._call_gemini_api(payload)
        except Exception as e:
            logger.warning(f"⚠️ Gemini categorization failed: {e}")
            return self._response(AITask.CATEGORIZATION, {}, error=f"Gemini API error: {e}")

        # The model answered but not with usable JSON: fall back to General
        try:
            category = normalize_category(_parse_json_text(text).get("category"))
        except ValueError:
            logger.warning(f"Unparseable Gemini category answer: {text!r}")
            category = "General"
        return self._response(AITask.CATEGORIZATION, {"category": category})

    def summarize_reports(self, reports: List[Dict[str, Any]]) -> AIResponse:
        system_prompt = (
            f"You are an expert civic data analyst for the city of {settings.CITY_NAME}. Analyze the "
            "provided JSON of civic reports. Identify the top 2-3 common issues, pinpoint the busiest "
            "locations, and suggest one concrete, actionable step for the municipal authorities. "
            "Provide a concise, professional summary as a single block of text. Do not use markdown "
            "formatting."
        )
        payload = {
            "contents": [{"parts": [{"text": f"Here are the recent reports: {json.dumps(reports)}"}]}],
            "systemInstruction": {"parts": [{"text": system_prompt}]},
        }
        try:
            text = self._call_gemini_api(payload).strip()
            return self._response(AITask.DASHBOARD_SUMMARY, {"summary": text})
        except Exception as e:
            logger.warning(f"⚠️ Gemini dashboard summary failed: {e}")
            return self._response(AITask.DASHBOARD_SUMMARY, {}, error=f"Gemini API error: {e}")

    def _call_gemini_api(self, payload: Dict) -> str:
        """
        POST a generateContent request and return the first candidate's text.

        Raises:
            RuntimeError: On a non-200 status or a response without text
            requests.RequestException: On network errors / timeout
        """
        url = f"{settings.GEMINI_API_BASE_URL}/{self.model}:generateContent"
        response = requests.post(
            url,
            params={"key": self.api_key},
            json=payload,
            timeout=self.get_timeout_seconds(),
        )

        if response.status_code != 200:
            raise RuntimeError(f"Gemini API returned status {response.status_code}: {response.text}")

        data = response.json()
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            logger.error(f"Unexpected Gemini response structure: {json.dumps(data)[:500]}")
            raise RuntimeError("Unexpected Gemini response structure")

        if not text:
            raise RuntimeError("Gemini returned an empty answer")
        return text


def _parse_json_text(text: str) -> Dict[str, Any]:
    """Parse a JSON object out of model text (tolerates ``` fences)."""
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0]
    elif "```" in text:
        text = text.split("```")[1].split("```")[0]

    try:
        parsed = json.loads(text.strip())
    except json.JSONDecodeError as e:
        raise ValueError(f"Model answer is not valid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise ValueError("Model answer is not a JSON object")
    return parsed
