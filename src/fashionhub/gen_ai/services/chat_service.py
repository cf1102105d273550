#
# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Chat Service - studio assistant chat over Gemini
"""

import logging
from typing import List, Literal, Optional

from google.genai import types
from pydantic import BaseModel

from .genai_client import GenAIClient

logger = logging.getLogger(__name__)


class ChatMessage(BaseModel):
    role: Literal["user", "model"]
    text: str


class ChatService:
    def __init__(self, genai_client: GenAIClient, model: str = "gemini-2.0-flash-001"):
        self.genai_client = genai_client
        self.model = model

    def _build_contents(self, message: str, history: Optional[List[ChatMessage]]) -> List[types.Content]:
        contents = []
        for entry in history or []:
            # the API expects the conversation to start with a user turn
            if not contents and entry.role == "model":
                continue
            contents.append(types.Content(role=entry.role, parts=[types.Part.from_text(text=entry.text)]))
        contents.append(types.Content(role="user", parts=[types.Part.from_text(text=message)]))
        return contents

    async def chat(self, message: str, history: Optional[List[ChatMessage]] = None) -> str:
        """
        Send a message with the previous turns and return the reply.

        Args:
            message: New user message.
            history: Earlier turns, oldest first.

        Returns:
            Reply text.
        """
        if not message or not message.strip():
            raise ValueError("Message must not be empty")

        logger.info(f"Chat message: {message[:100]}")
        contents = self._build_contents(message, history)
        reply = await self.genai_client.generate_text(
            contents, model=self.model, temperature=0.7, max_output_tokens=1000
        )
        logger.info(f"Chat reply: {reply[:100]}")
        return reply
