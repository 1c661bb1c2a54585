"""
Meeting summary generation using the Google Gemini API.
"""
from typing import Optional

import google.generativeai as genai

from recap.config import GEMINI_API_KEY, GEMINI_MODEL, TONE_INSTRUCTIONS, DEFAULT_TONE
from recap.errors import GenerationFailed
from recap.utils.logger import get_logger

logger = get_logger(__name__)

SUMMARY_PROMPT = """
You are an expert meeting summarizer. Please analyze the following meeting transcript and create a structured summary enhanced with relevant emojis for better readability and engagement.

TONE: {tone_instruction}

CUSTOM INSTRUCTIONS: {custom_prompt}

FORMATTING REQUIREMENTS:
- Use clear headings with appropriate emojis (## Heading 📋)
- Add relevant emojis to bullet points and action items
- Structure the content logically
- Include participant names when mentioned
- Highlight key decisions, action items, and deadlines
- Use emojis that enhance understanding without being excessive

TRANSCRIPT TO SUMMARIZE:
{transcript}

Please create a well-structured, emoji-enhanced summary that follows the custom instructions and maintains the specified tone.
"""


def tone_instruction(tone: str) -> str:
    """Instruction text for a tone; unknown tones fall back to professional."""
    return TONE_INSTRUCTIONS.get(tone, TONE_INSTRUCTIONS[DEFAULT_TONE])


def build_prompt(transcript: str, custom_prompt: str, tone: str) -> str:
    return SUMMARY_PROMPT.format(
        tone_instruction=tone_instruction(tone),
        custom_prompt=custom_prompt,
        transcript=transcript,
    )


class GeminiClient:
    """Uses Google's Gemini API to turn transcripts into summaries."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """
        Initialize the Gemini client.

        Args:
            api_key: Gemini API key, defaults to GEMINI_API_KEY
            model: Model name, defaults to GEMINI_MODEL
        """
        self.api_key = api_key or GEMINI_API_KEY
        self.model_name = model or GEMINI_MODEL

        if self.api_key:
            genai.configure(api_key=self.api_key)
            logger.info("Gemini API initialized successfully")
        else:
            logger.warning("No Gemini API key provided, summary generation will not work")

    def generate_summary(self, transcript: str, custom_prompt: str, tone: str) -> str:
        """
        Generate a summary of a transcript.

        Args:
            transcript: Meeting transcript text
            custom_prompt: User instructions for the summary
            tone: professional, casual, concise or detailed

        Returns:
            Summary text

        Raises:
            GenerationFailed: if the API call fails
        """
        if not self.api_key:
            raise GenerationFailed("AI summarization failed: Gemini API key not configured")

        prompt = build_prompt(transcript, custom_prompt, tone)

        try:
            model = genai.GenerativeModel(self.model_name)
            response = model.generate_content(prompt)
            summary = response.text or ""
        except Exception as e:
            logger.error(f"Error generating summary with Gemini: {e}")
            raise GenerationFailed(f"AI summarization failed: {e}")

        logger.info(f"Generated {len(summary)} character summary with {self.model_name}")
        return summary
