# tests/ai_tagger/fakes.py
"""
Test doubles and canned provider responses.
"""

from ai_tagger.adapters.base import AdapterConfig
from ai_tagger.adapters.providers import get_descriptor

TAGS_JSON = '```json\n{"matchedTags": ["a"], "newTags": ["b", "c"]}\n```'


class FakeTransport:
    """Records every post() and replays queued responses in order.

    The last queued response is reused once the queue runs dry. Queued
    exceptions are raised instead of returned.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def post(self, url, headers, body, timeout=None):
        self.calls.append({'url': url, 'headers': dict(headers), 'body': body, 'timeout': timeout})
        if not self.responses:
            raise AssertionError("FakeTransport has no response queued")
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


def chat_completion(text):
    """OpenAI-style chat completion body."""
    return {'choices': [{'index': 0, 'message': {'role': 'assistant', 'content': text}}]}


def provider_response(provider, text):
    """A well-formed response body for ``provider`` carrying ``text``."""
    if provider == 'claude':
        return {'content': [{'type': 'text', 'text': text}]}
    if provider == 'cohere':
        return {'text': text}
    if provider == 'vertex':
        return {'predictions': [{'candidates': [{'author': '1', 'content': text}]}]}
    if provider == 'bedrock':
        return {'completion': text}
    if provider == 'ollama':
        return {'message': {'role': 'assistant', 'content': text}, 'done': True}
    return chat_completion(text)


# settings each provider needs beyond its defaults
PROVIDER_CONFIGS = {
    'openai_compatible': {'endpoint': 'https://llm.example.com/v1/chat/completions', 'model_name': 'my-model'},
    'vertex': {
        'endpoint': 'https://us-central1-aiplatform.googleapis.com/v1/projects/my-proj/locations/'
                    'us-central1/publishers/google/models/chat-bison:predict',
    },
    'requesty': {'model_name': 'openai/gpt-4o-mini'},
    'openrouter': {'model_name': 'openai/gpt-4o-mini'},
    'siliconflow': {'model_name': 'Qwen/Qwen2.5-7B-Instruct'},
    'lm_studio': {'model_name': 'local-model'},
    'localai': {'model_name': 'local-model'},
}


def make_config(provider, **overrides):
    """AdapterConfig that passes validation for ``provider``."""
    descriptor = get_descriptor(provider)
    values = {'provider': provider, 'service_type': descriptor.service_type}
    if descriptor.service_type == 'cloud':
        values['api_key'] = 'sk-test'
    values.update(PROVIDER_CONFIGS.get(provider, {}))
    values.update(overrides)
    return AdapterConfig(**values)
