"""AI writing assistant backed by the OpenRouter chat completions API.

Generation never fails from the caller's point of view: any provider
problem is logged and replaced with fallback text so the editor always
gets something to work with.
"""

import re
from typing import Any, Dict, Optional

import httpx

from src.core.logger import get_logger

logger = get_logger(__name__)

DESCRIPTION_PROMPT = "Write a short 2-3 sentence description about: {title}"

CONTENT_PROMPT = """Write a comprehensive blog post about: "{title}"

Use markdown format with:
- # for main title
- ## for section headings
- **bold** for important terms
- Bullet points for lists
- 3-4 paragraphs of quality content"""

DESCRIPTION_FALLBACK = "Learn about {title} and discover key insights on this topic."

CONTENT_FALLBACK = """# {title}

> **Error Notice**: Content generation is temporarily unavailable.

## What happened?
We encountered a technical issue while generating AI content for **"{title}"**.

## Next steps:
1. **Check your API configuration** - Ensure your OpenRouter API key is valid
2. **Try again** - The issue might be temporary
3. **Manual creation** - You can write the content manually

### Error Details:
```
{error}
```

---

*Please try again or contact support if the issue persists.*"""

_EXTRA_BLANK_LINES_RE = re.compile(r"\n{3,}")


class AIServiceError(Exception):
    """Raised when the completion provider cannot produce text."""

    pass


class AIService:
    """Client for description and post body generation."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://openrouter.ai/api/v1",
        model: str = "gpt-3.5-turbo",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def close(self) -> None:
        await self.client.aclose()

    async def complete(self, prompt: str, temperature: float, max_tokens: int) -> str:
        """Send a single-turn chat completion and return the reply text."""
        if not self.configured:
            raise AIServiceError("OpenRouter API key is not configured")

        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        try:
            response = await self.client.post(
                "/chat/completions",
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        except httpx.HTTPError as e:
            raise AIServiceError(f"OpenRouter request failed: {e}") from e

        if response.is_error:
            raise AIServiceError(
                f"OpenRouter API error: {response.status_code} - {response.text}"
            )

        try:
            text = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise AIServiceError("OpenRouter returned an unexpected payload") from e

        text = (text or "").strip()
        if not text:
            raise AIServiceError("OpenRouter returned an empty completion")
        return text

    async def generate_description(self, title: str) -> str:
        try:
            return await self.complete(
                DESCRIPTION_PROMPT.format(title=title), temperature=0.5, max_tokens=100
            )
        except AIServiceError as e:
            logger.warning(f"⚠️ Description generation failed for {title!r}: {e}")
            return DESCRIPTION_FALLBACK.format(title=title)

    async def generate_content(self, title: str) -> str:
        logger.info(f"🤖 Generating content for: {title}")
        try:
            content = await self.complete(
                CONTENT_PROMPT.format(title=title), temperature=0.7, max_tokens=1024
            )
        except AIServiceError as e:
            logger.warning(f"⚠️ Content generation failed for {title!r}: {e}")
            # Backticks in upstream error text would close the fence early
            error = str(e).replace("`", "'")
            return CONTENT_FALLBACK.format(title=title, error=error)

        if not content.startswith("#"):
            content = f"# {title}\n\n{content}"
        return _EXTRA_BLANK_LINES_RE.sub("\n\n", content)
