# ai_tagger/adapters/formats.py
"""
Request body builders, one per ``body_style``.

Every builder has the same signature:
    (prompt, model, defaults, extras) -> dict
"""

from typing import Any, Callable, Dict, List, Mapping

from ..core.prompts import TAG_SYSTEM_PROMPT

BodyFormatter = Callable[[str, str, Mapping[str, Any], Mapping[str, Any]], Dict[str, Any]]


def chat_messages(prompt: str) -> List[Dict[str, str]]:
    return [
        {'role': 'system', 'content': TAG_SYSTEM_PROMPT},
        {'role': 'user', 'content': prompt},
    ]


def format_chat(prompt, model, defaults, extras):
    """OpenAI-style chat completion body."""
    return {
        **defaults,
        'model': model,
        'messages': chat_messages(prompt),
        **extras,
    }


def format_ollama(prompt, model, defaults, extras):
    return {
        **defaults,
        'model': model,
        'messages': chat_messages(prompt),
        'stream': False,
        **extras,
    }


def format_anthropic(prompt, model, defaults, extras):
    """Anthropic messages API: system prompt is a top-level field."""
    return {
        **defaults,
        'model': model,
        'system': TAG_SYSTEM_PROMPT,
        'messages': [{'role': 'user', 'content': prompt}],
        **extras,
    }


def format_cohere(prompt, model, defaults, extras):
    return {
        **defaults,
        'model': model,
        'message': prompt,
        'preamble': TAG_SYSTEM_PROMPT,
        'chat_history': [],
        'connectors': [],
        'stream': False,
        **extras,
    }


def format_vertex(prompt, model, defaults, extras):
    # model is part of the endpoint URL for Vertex predict calls
    return {
        'instances': [{
            'context': TAG_SYSTEM_PROMPT,
            'messages': [{'author': 'user', 'content': prompt}],
        }],
        'parameters': {**defaults, **extras},
    }


def format_bedrock(prompt, model, defaults, extras):
    """Bedrock invoke body; the shape depends on the model family."""
    family = (model or '').lower()
    max_tokens = defaults.get('max_tokens', 1024)
    temperature = defaults.get('temperature', 0.7)
    full_prompt = f"{TAG_SYSTEM_PROMPT}\n\n{prompt}"

    if 'claude' in family:
        body = {
            'prompt': f"\n\nHuman: {full_prompt}\n\nAssistant:",
            'max_tokens_to_sample': max_tokens,
            'temperature': temperature,
        }
    elif 'titan' in family:
        body = {
            'inputText': full_prompt,
            'textGenerationConfig': {
                'maxTokenCount': max_tokens,
                'temperature': temperature,
                'stopSequences': [],
            },
        }
    else:
        body = {
            'prompt': full_prompt,
            'max_tokens': max_tokens,
            'temperature': temperature,
        }
    body.update(extras)
    return body


BODY_FORMATTERS: Dict[str, BodyFormatter] = {
    'chat': format_chat,
    'ollama': format_ollama,
    'anthropic': format_anthropic,
    'cohere': format_cohere,
    'vertex': format_vertex,
    'bedrock': format_bedrock,
}


def format_body(style: str, prompt: str, model: str,
                defaults: Mapping[str, Any], extras: Mapping[str, Any]) -> Dict[str, Any]:
    try:
        formatter = BODY_FORMATTERS[style]
    except KeyError:
        raise ValueError(f"Unknown body style: {style}. Available: {list(BODY_FORMATTERS)}")
    return formatter(prompt, model, defaults, extras)
