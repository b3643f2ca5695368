#!/usr/bin/env python3
"""
Basic usage example for anthropic-sdk-light

This example demonstrates non-streaming message creation against the
Anthropic Messages API. Set ANTHROPIC_API_KEY (and optionally
ANTHROPIC_BASE_URL) before running.
"""

from anthropic_light import (
    Anthropic,
    AnthropicError,
    AuthenticationError,
    RateLimitError,
    ValidationError,
    configure_logging,
)


MODEL = "claude-3-5-haiku-20241022"


def main():
    """Main example function demonstrating various API usage patterns."""

    print("anthropic-sdk-light - Basic Usage Examples")
    print("=" * 50)

    try:
        client = Anthropic()
    except ValidationError as e:
        print(f"Cannot create client: {e}")
        return

    with client:
        # Example 1: Simple single message
        print("\n1. Simple single message:")
        try:
            message = client.messages.create(
                model=MODEL,
                max_tokens=256,
                messages=[{"role": "user", "content": "Hello! Can you explain what you are?"}],
            )

            print(f"Response ID: {message.id}")
            print(f"Model: {message.model}")
            print(f"Content: {message.text}")
            print(f"Usage: {message.usage.input_tokens} in, {message.usage.output_tokens} out")

        except AnthropicError as e:
            print(f"Error in example 1: {e}")

        # Example 2: Multi-turn conversation with a system prompt
        print("\n2. Multi-turn conversation:")
        try:
            message = client.messages.create(
                model=MODEL,
                max_tokens=256,
                temperature=0.3,
                system="Answer in one sentence.",
                messages=[
                    {"role": "user", "content": "What's the capital of France?"},
                    {"role": "assistant", "content": "The capital of France is Paris."},
                    {"role": "user", "content": "What's the population of that city?"},
                ],
            )

            print(f"Assistant: {message.text}")
            print(f"Stop reason: {message.stop_reason}")

        except RateLimitError as e:
            print(f"Rate limited, retry after {e.retry_after}s")
        except AnthropicError as e:
            print(f"Error in example 2: {e}")

        # Example 3: Local validation, nothing is sent
        print("\n3. Error handling example:")
        try:
            client.messages.create(model=MODEL, max_tokens=256, messages=[])
            print("Unexpected success!")

        except ValidationError as e:
            print(f"Expected error caught: {e.message}")

        # Example 4: Bad credentials
        print("\n4. Authentication failure:")
        try:
            with Anthropic(api_key="sk-invalid", base_url=client.base_url) as bad_client:
                bad_client.messages.create(
                    model=MODEL,
                    max_tokens=16,
                    messages=[{"role": "user", "content": "Hi"}],
                )
        except AuthenticationError as e:
            print(f"Expected error caught: {e.status_code} {e.message}")
        except AnthropicError as e:
            print(f"Other error: {e!r}")


if __name__ == "__main__":
    configure_logging()
    main()
