"""
Health-insights text generation on AWS Bedrock.

Every request is framed as a public-health analyst answering a Barangay
Health Worker. The blocking boto3 `converse` call runs in a worker thread so
request handlers can await it.
"""

import asyncio
import logging
from typing import Optional
import boto3
from eclinic.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

HEALTH_ANALYST_PROMPT = """You are a public health analyst supporting Barangay Health Workers.
Answer in plain language a community health worker can act on.
Keep it professional and community-focused."""


class LLMService:
    def __init__(self, system_prompt: str = HEALTH_ANALYST_PROMPT, max_tokens: int = 512):
        self.model_id = settings.aws_bedrock_model_id
        self.region = settings.aws_region
        self.system_prompt = system_prompt
        self.max_tokens = max_tokens
        self._client = None

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client(
                "bedrock-runtime",
                region_name=self.region,
                aws_access_key_id=settings.aws_access_key_id or None,
                aws_secret_access_key=settings.aws_secret_access_key or None,
            )
        return self._client

    async def generate(self, prompt: str, system: Optional[str] = None, temperature: float = 0.4) -> str:
        """Raises on transport failures and on a reply with no text."""
        response = await asyncio.to_thread(
            self.client.converse,
            modelId=self.model_id,
            messages=[{"role": "user", "content": [{"text": prompt}]}],
            system=[{"text": system or self.system_prompt}],
            inferenceConfig={"temperature": temperature, "maxTokens": self.max_tokens},
        )
        blocks = response["output"]["message"]["content"]
        text = "\n".join(block["text"] for block in blocks if "text" in block).strip()
        if not text:
            raise ValueError(f"{self.model_id} returned no text")
        logger.info("Generated %d characters with %s", len(text), self.model_id)
        return text


llm_service = LLMService()
