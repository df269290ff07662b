"""
Unified LLM client with fallback support
Priority: Groq → Gemini → Ollama
All API keys read from environment / config (no secrets in code).
"""

import logging
from typing import Any, Dict, List, Optional

import ollama
import requests

from one_take_studio import config
from one_take_studio.domain.errors import CompletionError
from one_take_studio.ports.interfaces import ICompletionTransport

logger = logging.getLogger(__name__)


class LLMClient(ICompletionTransport):
    """Completion transport over Groq (OpenAI-compatible REST), Gemini REST and a local Ollama."""

    def __init__(
        self,
        groq_api_key: Optional[str] = None,
        gemini_api_key: Optional[str] = None,
        use_ollama: Optional[bool] = None,
        timeout: Optional[int] = None,
    ):
        # Priority 1: Groq (set GROQ_API_KEY in .env)
        self.groq_config = {
            "model": config.GROQ_MODEL,
            "api_key": groq_api_key if groq_api_key is not None else config.GROQ_API_KEY,
            "base_url": config.GROQ_BASE_URL,
        }

        # Priority 2: Gemini (set GEMINI_API_KEY in .env)
        self.gemini_config = {
            "model": config.GEMINI_MODEL,
            "api_key": gemini_api_key if gemini_api_key is not None else config.GEMINI_API_KEY,
            "base_url": config.GEMINI_BASE_URL,
        }

        # Priority 3: Ollama (fallback; local)
        self.ollama_config = {
            "base_url": config.OLLAMA_BASE_URL,
            "model": config.OLLAMA_MODEL,
            "enabled": config.USE_OLLAMA_FALLBACK if use_ollama is None else use_ollama,
        }

        self.timeout = timeout or config.LLM_TIMEOUT
        self.providers = self._configured_providers()
        if not self.providers:
            logger.warning("No LLM providers configured!")

    def _configured_providers(self) -> List[str]:
        """Providers in priority order; hosted ones need an API key."""
        providers = []
        if (self.groq_config.get("api_key") or "").strip():
            providers.append("groq")
        if (self.gemini_config.get("api_key") or "").strip():
            providers.append("gemini")
        if self.ollama_config["enabled"]:
            providers.append("ollama")
        return providers

    def complete(
        self,
        *,
        system_instruction: str,
        user_prompt: str,
        model: str = "",
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> str:
        """
        Try each provider in order and return the first completion.
        `model` overrides the Groq model; fallbacks use their own configured models.
        """
        handlers = {
            "groq": self._complete_groq,
            "gemini": self._complete_gemini,
            "ollama": self._complete_ollama,
        }
        for provider in self.providers:
            text = handlers[provider](system_instruction, user_prompt, model, temperature, max_tokens)
            if text is not None:
                logger.debug("Got %d characters from %s", len(text), provider)
                return text
            logger.info("%s failed, trying next provider", provider)

        raise CompletionError(f"All LLM providers failed (tried: {', '.join(self.providers) or 'none'})")

    def _complete_groq(
        self, system_instruction: str, user_prompt: str, model: str, temperature: float, max_tokens: int
    ) -> Optional[str]:
        """Generate using Groq chat completions"""
        try:
            url = f"{self.groq_config['base_url']}/chat/completions"
            headers = {
                "Authorization": f"Bearer {self.groq_config['api_key']}",
                "Content-Type": "application/json",
            }
            data = {
                "model": model or self.groq_config["model"],
                "messages": [
                    {"role": "system", "content": system_instruction},
                    {"role": "user", "content": user_prompt},
                ],
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
            response = requests.post(url, headers=headers, json=data, timeout=self.timeout)
            if response.status_code != 200:
                logger.warning("Groq API returned status %s: %s", response.status_code, response.text[:500])
                return None
            result: Dict[str, Any] = response.json()
            return (result.get("choices") or [{}])[0].get("message", {}).get("content") or ""
        except (requests.RequestException, ValueError) as e:
            logger.warning("Groq error: %s", e)
            return None

    def _complete_gemini(
        self, system_instruction: str, user_prompt: str, model: str, temperature: float, max_tokens: int
    ) -> Optional[str]:
        """Generate using Gemini REST API"""
        try:
            url = f"{self.gemini_config['base_url']}/{self.gemini_config['model']}:generateContent"
            data = {
                "systemInstruction": {"parts": [{"text": system_instruction}]},
                "contents": [{"role": "user", "parts": [{"text": user_prompt}]}],
                "generationConfig": {
                    "temperature": temperature,
                    "maxOutputTokens": max_tokens,
                },
            }
            # API key in headers (more reliable than query params)
            headers = {
                "x-goog-api-key": self.gemini_config["api_key"],
                "Content-Type": "application/json",
            }
            response = requests.post(url, headers=headers, json=data, timeout=self.timeout)
            if response.status_code != 200:
                logger.warning("Gemini API returned status %s: %s", response.status_code, response.text[:500])
                return None

            result = response.json()
            candidate = (result.get("candidates") or [{}])[0]
            finish_reason = candidate.get("finishReason", "UNKNOWN")
            if finish_reason == "SAFETY":
                logger.warning("Gemini response blocked by safety filters")
            elif finish_reason == "MAX_TOKENS":
                logger.warning("Gemini response hit token limit, JSON is probably truncated")
            parts = candidate.get("content", {}).get("parts", [])
            return parts[0].get("text", "") if parts else ""
        except (requests.RequestException, ValueError) as e:
            logger.warning("Gemini REST API error: %s", e)
            return None

    def _complete_ollama(
        self, system_instruction: str, user_prompt: str, model: str, temperature: float, max_tokens: int
    ) -> Optional[str]:
        """Generate using Ollama"""
        try:
            client = ollama.Client(host=self.ollama_config["base_url"])
            response = client.generate(
                model=self.ollama_config["model"],
                prompt=user_prompt,
                system=system_instruction,
                options={
                    "temperature": temperature,
                    "num_predict": max_tokens,
                },
            )
            return response.get("response", "")
        except Exception as e:
            logger.warning("Ollama error: %s", e)
            return None
