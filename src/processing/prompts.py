# src/processing/prompts.py
"""Prompt builders, one per processing type."""

from __future__ import annotations

from contentengine.processing.models import GenerateOptions, SummarizeOptions, TranslateOptions


def summarize_prompt(content: str, options: SummarizeOptions) -> str:
    return (
        f"You are an expert content summarizer. Create {options.style} summaries "
        f"that capture the key points and main ideas. "
        f"Keep summaries under {options.max_length} words.\n\n"
        f"Content to summarize:\n{content}"
    )


def sentiment_prompt(content: str) -> str:
    return (
        "You are a sentiment analysis expert. Analyze the sentiment of the given "
        "text and provide:\n"
        "1. Overall sentiment (positive, negative, neutral)\n"
        "2. Confidence score (0-10)\n"
        "3. Key emotional indicators\n"
        "4. Brief explanation\n\n"
        'Respond in JSON format only, using the keys "sentiment", "confidence", '
        '"emotionalIndicators" and "explanation".\n\n'
        f"Text to analyze:\n{content}"
    )


def keywords_prompt(content: str) -> str:
    return (
        "Extract the most important keywords and key phrases from the given text. "
        'Return a JSON array of objects of the form {"keyword": ..., "relevance": ...} '
        "with relevance scores (0-10). Focus on nouns, important adjectives, and "
        "key concepts.\n\n"
        f"Text to analyze:\n{content}"
    )


def generate_prompt(request: str, options: GenerateOptions) -> str:
    return (
        f"You are a professional content creator. Generate high-quality, "
        f"{options.style} content based on the user's request. Ensure the content "
        f"is engaging, well-structured, and appropriate for the intended audience.\n\n"
        f"User request:\n{request}"
    )


def translate_prompt(content: str, options: TranslateOptions) -> str:
    formatting = (
        " Preserve the original formatting and structure."
        if options.preserve_formatting
        else ""
    )
    return (
        f"You are a professional translator. Translate the given text to "
        f"{options.target_language}.{formatting} Ensure accuracy and natural flow "
        f"in the target language.\n\n"
        f"Text to translate:\n{content}"
    )
