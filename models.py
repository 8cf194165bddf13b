"""Pydantic schemas, constants, and the tutor system prompt."""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr

# --- Constants ---
TRANSLATION_OPEN = '<div class="translation">'
TRANSLATION_CLOSE = "</div>"
FALLBACK_TRANSLATION = "中文翻译未能正确提取，请查看英文回复内容。"

SYSTEM_PROMPT = """你是专业的英语AI教师助手。用户只能用英文向你提问。你的任务是：

1. 提供详细、有帮助的英语学习内容（词汇、语法、写作、发音等）
2. 给出具体例句和使用场景
3. 提供完整的中文翻译
4. 鼓励和教育性的语气
5. 如果被问词汇含义，提供定义、用法和例句
6. 如果被问语法，清楚解释规则并举例
7. 如果被问写作，给出结构化指导
8. 回复要全面但简洁

请按以下格式回复：
[英文回复内容，包含详细解释和例句]

然后在最后添加：
<div class="translation">[对应的中文翻译]</div>

记住：用户只能用英文提问，你要用中英双语回答，帮助用户学好英语！重点突出实用性和教育价值。"""


# --- Inbound ---

class ChatRequest(BaseModel):
    # Only `message` is read; a whitespace-only message is still a message.
    message: StrictStr = Field(min_length=1)


# --- Upstream (DeepSeek, OpenAI-compatible) ---

class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: str
    content: str


class ChatCompletionRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    model: str
    messages: List[ChatMessage]
    max_tokens: int
    temperature: float
    stream: bool = False


class AssistantMessage(BaseModel):
    content: StrictStr


class Choice(BaseModel):
    message: AssistantMessage


class ChatCompletionResponse(BaseModel):
    choices: List[Choice] = Field(min_length=1)


# --- Envelopes ---

class SuccessEnvelope(BaseModel):
    success: bool = True
    text: str
    translation: str


class ErrorEnvelope(BaseModel):
    success: bool = False
    error: str
    details: Optional[str] = None
