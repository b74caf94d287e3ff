"""Minimal demonstration of a single message exchange."""

from gemini_chat.api.service import get_messages, send_message

if __name__ == "__main__":
    question = "Explique em duas frases o que é um modelo de linguagem."
    send_message(question)
    for message in get_messages():
        print(f"{message['role']}: {message['content']}")
