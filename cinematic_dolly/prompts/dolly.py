"""Cinematic dolly-in prompt for image-to-video generation

The constraint block is fixed; only the mood line changes between requests.
"""

from typing import Optional

DEFAULT_MOOD = "Luxury real estate style, clean and professional"

DOLLY_SYSTEM_CONSTRAINTS = """
OUTPUT FORMAT (MANDATORY):
- Aspect Ratio: 9:16 (vertical)
- Portrait orientation ONLY
- No horizontal or square output

CRITICAL CONSTRAINTS:
- Do NOT add, remove, replace, or modify ANY objects.
- Do NOT move, rotate, resize, or animate any objects.
- All furniture, decor, lighting, textures, materials, and layout MUST remain IDENTICAL to the original image.
- No new elements, no disappearing elements, no deformation.

ONLY allowed motion:
- Camera movement ONLY.
- No object motion of any kind.

CAMERA RULES:
- First-person perspective
- Slow cinematic push-in
- Camera starts FAR from the room entrance
- Camera moves forward smoothly toward the center of the room
- Straight forward motion only
- No pan, no tilt, no roll
- Stable, realistic dolly movement
"""

DOLLY_VIDEO_PROMPT_TEMPLATE = {
    "template": """{constraints}
Generate a cinematic vertical video (9:16) from the uploaded image.
The scene must remain EXACTLY the same as the original image.

Camera movement: A slow, smooth forward dolly shot from a distant first-person viewpoint, gradually approaching the room interior.
Mood/Style: {mood}
"""
}


def resolve_mood(mood: Optional[str]) -> str:
    """User mood text, or the default style when nothing usable was given"""
    if mood is None or not mood.strip():
        return DEFAULT_MOOD
    return mood.strip()


def compose_prompt(mood: Optional[str] = None) -> str:
    """Build the full Veo instruction for a dolly-in shot

    Args:
        mood: Optional mood/style text from the user

    Returns:
        Constraint block + generation instruction + mood line
    """
    return DOLLY_VIDEO_PROMPT_TEMPLATE["template"].format(
        constraints=DOLLY_SYSTEM_CONSTRAINTS,
        mood=resolve_mood(mood)
    )
