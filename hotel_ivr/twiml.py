"""Render dialogue responses as TwiML documents.

Protocol reference:
  https://www.twilio.com/docs/voice/twiml

A continuing turn nests the prompt inside the gather so the caller can
speak over it::

  <Response>
    <Gather input="speech" action="/handle-inquiry" speechTimeout="auto" language="en-US">
      <Say voice="Polly.Amy-Neural">...</Say>
    </Gather>
  </Response>

A final turn is a bare ``<Say>``, optionally followed by ``<Dial>``.
"""

from __future__ import annotations

from xml.etree.ElementTree import Element, SubElement, tostring

from fastapi.responses import Response

from hotel_ivr.models.response import DialogueResponse

TWIML_MEDIA_TYPE = "text/xml"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def _say(parent: Element, text: str, voice: str = "") -> Element:
    say_el = SubElement(parent, "Say")
    if voice:
        say_el.set("voice", voice)
    say_el.text = text
    return say_el


def _to_string(response_el: Element) -> str:
    # tostring(xml_declaration=True) would declare the locale encoding
    return XML_DECLARATION + tostring(response_el, encoding="unicode")


def render_dialogue(response: DialogueResponse, voice: str = "") -> str:
    """Build the TwiML for one dialogue turn."""
    response_el = Element("Response")

    if response.gather is not None:
        gather = response.gather
        gather_el = SubElement(response_el, "Gather")
        gather_el.set("input", gather.input)
        gather_el.set("action", gather.action)
        gather_el.set("speechTimeout", gather.speech_timeout)
        gather_el.set("language", gather.language)
        _say(gather_el, response.prompt, voice)
    else:
        _say(response_el, response.prompt, voice)
        if response.transfer_to:
            dial_el = SubElement(response_el, "Dial")
            dial_el.text = response.transfer_to

    return _to_string(response_el)


def render_say(text: str, voice: str = "") -> str:
    """TwiML that speaks *text* once and ends the call."""
    response_el = Element("Response")
    _say(response_el, text, voice)
    return _to_string(response_el)


def twiml_response(twiml: str, status_code: int = 200) -> Response:
    return Response(content=twiml, media_type=TWIML_MEDIA_TYPE, status_code=status_code)
