"""
Core — Response Renderer

Successful responses are wrapped as
  { "success": true, "data": ..., "meta": {count, page, page_size, ...} }
Error responses already carry the envelope built by
core.exceptions.standard_exception_handler and pass through untouched.

@file core/renderers.py
"""

from rest_framework.renderers import JSONRenderer

PAGINATION_META_KEYS = ('count', 'page', 'page_size', 'next', 'previous')


class EnvelopeJSONRenderer(JSONRenderer):

    def render(self, data, accepted_media_type=None, renderer_context=None):
        response = (renderer_context or {}).get('response')

        if response is not None and response.status_code >= 400:
            return super().render(data, accepted_media_type, renderer_context)
        if isinstance(data, dict) and 'success' in data:
            return super().render(data, accepted_media_type, renderer_context)

        if isinstance(data, dict) and 'results' in data:
            envelope = {
                'success': True,
                'data': data['results'],
                'meta': {key: data.get(key) for key in PAGINATION_META_KEYS if key in data},
            }
        else:
            envelope = {'success': True, 'data': data}

        return super().render(envelope, accepted_media_type, renderer_context)
