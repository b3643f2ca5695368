#!/usr/bin/env python3
"""
Streaming usage example for anthropic-sdk-light

This example demonstrates streaming message creation. The client parses the
Server-Sent Events response and hands back typed events as they arrive.
"""

import time

from anthropic_light import Anthropic, AnthropicError, StreamInterruptedError, configure_logging
from anthropic_light.models import ContentBlockDeltaEvent, MessageDeltaEvent, MessageStartEvent


MODEL = "claude-3-5-haiku-20241022"


def stream_text(client: Anthropic, prompt: str) -> None:
    """Print text deltas as they arrive."""
    with client.messages.create(
        model=MODEL,
        max_tokens=512,
        messages=[{"role": "user", "content": prompt}],
        stream=True,
    ) as stream:
        for text in stream.text_stream():
            print(text, end="", flush=True)
    print()


def stream_events(client: Anthropic, prompt: str) -> None:
    """Walk the raw event sequence and report timing and usage."""
    start_time = time.time()
    first_token_time = None

    stream = client.messages.create(
        model=MODEL,
        max_tokens=256,
        messages=[{"role": "user", "content": prompt}],
        stream=True,
    )
    try:
        for event in stream:
            if isinstance(event, MessageStartEvent):
                print(f"[message_start] id={event.message.id}")
            elif isinstance(event, ContentBlockDeltaEvent):
                if first_token_time is None:
                    first_token_time = time.time()
                print(event.delta.text, end="", flush=True)
            elif isinstance(event, MessageDeltaEvent):
                print(f"\n[message_delta] stop_reason={event.delta.stop_reason} "
                      f"output_tokens={event.usage.output_tokens}")
            else:
                print(f"\n[{event.type}]")
    finally:
        stream.close()

    total_time = time.time() - start_time
    print(f"Events: {stream.event_count}, total time: {total_time:.2f}s")
    if first_token_time is not None:
        print(f"Time to first token: {first_token_time - start_time:.2f}s")


def collect_message(client: Anthropic, prompt: str) -> None:
    """Stream a response and assemble the final Message from its events."""
    stream = client.messages.create(
        model=MODEL,
        max_tokens=256,
        messages=[{"role": "user", "content": prompt}],
        stream=True,
    )
    message = stream.get_final_message()
    print(f"{message.text}\n(stop_reason={message.stop_reason}, usage={message.usage.total_tokens} tokens)")


def main():
    print("anthropic-sdk-light - Streaming Examples")
    print("=" * 50)

    with Anthropic() as client:
        try:
            print("\n1. Text stream:")
            stream_text(client, "Write a haiku about rivers.")

            print("\n2. Event stream:")
            stream_events(client, "Count from one to five.")

            print("\n3. Final message:")
            collect_message(client, "Name three primary colors.")
        except StreamInterruptedError as e:
            print(f"\nStream interrupted: {e}")
        except AnthropicError as e:
            print(f"\nError: {e!r}")


if __name__ == "__main__":
    configure_logging()
    main()
