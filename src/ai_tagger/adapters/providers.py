# ai_tagger/adapters/providers.py
"""
Registry of supported LLM providers.
"""

from typing import Dict, List

from .base import CHOICES_MESSAGE_CONTENT, DEFAULT_ERROR_PATHS, ProviderDescriptor

LOCAL_REQUIRED = ('endpoint', 'model_name')

BEDROCK_ERROR_PATHS = (
    ('errorMessage',),
    ('response', 'data', 'errorMessage'),
) + DEFAULT_ERROR_PATHS


def _chat_provider(name, display_name, endpoint, model=None, **kwargs) -> ProviderDescriptor:
    """Descriptor for an OpenAI-compatible chat completions API."""
    return ProviderDescriptor(
        name=name,
        display_name=display_name,
        default_endpoint=endpoint,
        default_model=model,
        body_style='chat',
        **kwargs,
    )


_DESCRIPTORS = [
    _chat_provider('openai', 'OpenAI', 'https://api.openai.com/v1/chat/completions', 'gpt-4.1'),
    # user supplies endpoint and model
    _chat_provider('openai_compatible', 'OpenAI Compatible', None),
    ProviderDescriptor(
        name='claude',
        display_name='Claude',
        default_endpoint='https://api.anthropic.com/v1/messages',
        default_model='claude-3-5-haiku-latest',
        body_style='anthropic',
        body_defaults={'max_tokens': 1024},
        auth_style='anthropic',
        content_paths=(('content', 0, 'text'),),
    ),
    ProviderDescriptor(
        name='cohere',
        display_name='Cohere',
        default_endpoint='https://api.cohere.ai/v1/chat',
        default_model='command-r',
        body_style='cohere',
        body_defaults={'temperature': 0.7},
        extra_headers={'Accept': 'application/json'},
        content_paths=(('text',),),
    ),
    ProviderDescriptor(
        name='vertex',
        display_name='Vertex AI',
        default_model='chat-bison',
        body_style='vertex',
        body_defaults={'temperature': 0.7, 'maxOutputTokens': 1024, 'topP': 0.8, 'topK': 40},
        auth_style='vertex',
        content_paths=(('predictions', 0, 'candidates', 0, 'content'),),
    ),
    ProviderDescriptor(
        name='bedrock',
        display_name='AWS Bedrock',
        default_endpoint='https://bedrock-runtime.us-east-1.amazonaws.com/model/{model}/invoke',
        default_model='anthropic.claude-3-haiku-20240307-v1:0',
        body_style='bedrock',
        body_defaults={'max_tokens': 1024, 'temperature': 0.7},
        content_paths=(
            ('completion',),
            ('results', 0, 'outputText'),
            ('generation',),
        ),
        error_paths=BEDROCK_ERROR_PATHS,
    ),
    _chat_provider('groq', 'Groq', 'https://api.groq.com/openai/v1/chat/completions',
                   'mixtral-8x7b-32768'),
    _chat_provider('grok', 'Grok', 'https://api.x.ai/v1/chat/completions', 'grok-beta',
                   body_defaults={'max_tokens': 2048}),
    _chat_provider('deepseek', 'DeepSeek', 'https://api.deepseek.com/v1/chat/completions',
                   'deepseek-chat'),
    _chat_provider('aliyun', 'Aliyun', 'https://dashscope.aliyuncs.com/compatible-mode/v1/chat/completions',
                   'qwen-max'),
    _chat_provider('requesty', 'Requesty', 'https://router.requesty.ai/v1/chat/completions', None,
                   body_defaults={'temperature': 0.7, 'max_tokens': 1024}),
    _chat_provider('openrouter', 'OpenRouter', 'https://openrouter.ai/api/v1/chat/completions', None,
                   extra_headers={
                       'HTTP-Referer': 'https://github.com/obsidian-ai-tagger',
                       'X-Title': 'Obsidian AI Tagger',
                   }),
    _chat_provider('siliconflow', 'SiliconFlow', 'https://api.siliconflow.cn/v1/chat/completions', None),
    ProviderDescriptor(
        name='ollama',
        display_name='Ollama',
        service_type='local',
        default_endpoint='http://localhost:11434/api/chat',
        default_model='llama',
        body_style='ollama',
        required_fields=LOCAL_REQUIRED,
        # /api/chat answers with message.content, /api/generate with response
        content_paths=(('message', 'content'), ('response',), CHOICES_MESSAGE_CONTENT),
    ),
    _chat_provider('lm_studio', 'LM Studio', 'http://localhost:1234/v1/chat/completions', None,
                   service_type='local', required_fields=LOCAL_REQUIRED),
    _chat_provider('localai', 'LocalAI', 'http://localhost:8080/v1/chat/completions', None,
                   service_type='local', required_fields=LOCAL_REQUIRED),
]

PROVIDERS: Dict[str, ProviderDescriptor] = {d.name: d for d in _DESCRIPTORS}


def list_providers(service_type=None) -> List[str]:
    """Registered provider names, optionally only 'local' or 'cloud' ones."""
    return [
        name for name, descriptor in PROVIDERS.items()
        if service_type is None or descriptor.service_type == service_type
    ]


def get_descriptor(name: str) -> ProviderDescriptor:
    try:
        return PROVIDERS[name]
    except KeyError:
        raise ValueError(f"Unsupported provider: {name}. Available: {list_providers()}")
