from unittest.mock import MagicMock, patch
import pytest
import requests
from services.llm_client import (
    GeminiClient,
    OllamaClient,
    create_llm_client,
    extract_json_object,
    parse_json_object,
    strip_code_fences,
)


def _response(json_data=None, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status_code} error")
    return response


def test_strip_code_fences():
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('```\n{"a": 1}```') == '{"a": 1}'
    assert strip_code_fences('```json\n{"a": 1}') == '{"a": 1}'
    assert strip_code_fences('  {"a": 1}  ') == '{"a": 1}'
    assert strip_code_fences('') == ''


def test_parse_json_object():
    assert parse_json_object('```json\n{"skillGaps": []}\n```') == {'skillGaps': []}
    with pytest.raises(ValueError):
        parse_json_object('"just a string"')


def test_extract_json_object():
    assert extract_json_object('Here you go: {"a": {"b": 2}} thanks') == {'a': {'b': 2}}
    assert extract_json_object('no braces here') is None
    assert extract_json_object('{broken json}') is None
    assert extract_json_object('') is None


def test_gemini_chat_sends_system_instruction():
    with patch('services.llm_client.genai.Client') as client_cls:
        sdk = client_cls.return_value
        sdk.models.generate_content.return_value = MagicMock(text=' {"ok": true}\n')
        client = GeminiClient(api_key='test-key', model_name='gemini-test', timeout=30)
        assert client.chat('system', 'user') == '{"ok": true}'

    assert client_cls.call_args.kwargs['api_key'] == 'test-key'
    assert client_cls.call_args.kwargs['http_options'].timeout == 30_000
    kwargs = sdk.models.generate_content.call_args.kwargs
    assert kwargs['model'] == 'gemini-test'
    assert kwargs['contents'] == 'user'
    assert kwargs['config'].system_instruction == 'system'


def test_gemini_sdk_error_becomes_runtime_error():
    with patch('services.llm_client.genai.Client') as client_cls:
        client_cls.return_value.models.generate_content.side_effect = ConnectionError("503 UNAVAILABLE")
        client = GeminiClient(api_key='test-key')
        with pytest.raises(RuntimeError, match="Gemini API error"):
            client.chat('system', 'user')


def test_gemini_without_text():
    with patch('services.llm_client.genai.Client') as client_cls:
        client_cls.return_value.models.generate_content.return_value = MagicMock(text=None)
        with pytest.raises(RuntimeError, match="no text"):
            GeminiClient(api_key='test-key').chat('system', 'user')


def test_gemini_requires_api_key():
    with patch('services.llm_client.GEMINI_API_KEY', ''):
        with pytest.raises(ValueError):
            GeminiClient(api_key='')


def test_ollama_chat():
    tags = _response({'models': [{'name': 'llama3'}]})
    reply = _response({'message': {'role': 'assistant', 'content': 'hello'}})
    with patch('services.llm_client.requests.get', return_value=tags), \
            patch('services.llm_client.requests.post', return_value=reply) as post:
        client = OllamaClient(base_url='http://ollama.local:11434', model_name='llama3')
        assert client.chat('system', 'user') == 'hello'

    args, kwargs = post.call_args
    assert args[0] == 'http://ollama.local:11434/api/chat'
    assert kwargs['json']['stream'] is False
    assert kwargs['json']['messages'][0] == {'role': 'system', 'content': 'system'}


def test_create_llm_client_rejects_unknown_provider():
    with pytest.raises(ValueError, match="Unsupported LLM provider"):
        create_llm_client('openai')
