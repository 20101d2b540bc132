"""Command-line interface for the voice relay pipeline."""

import asyncio
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel

from voice_relay.config import AppConfig, load_config
from voice_relay.dependencies import (
    build_chat_chain,
    build_fallback_chain,
    build_http_client,
    build_pipeline_handler,
    build_recording_session,
    build_speech_dispatcher,
    build_translation_relay,
)
from voice_relay.domain import (
    BatchTranslationRequest,
    ChatMode,
    FallbackChain,
    PipelineMode,
    PipelineRequest,
    PipelineResult,
    TranslationRequest,
)
from voice_relay.exceptions import VoiceRelayError

app = typer.Typer(help="Record, transcribe, translate and speak.")
console = Console()


async def _wait_for_stop(duration: Optional[float]) -> None:
    if duration is not None:
        await asyncio.sleep(duration)
        return
    await asyncio.to_thread(input, "")


async def _record_and_process(
    config: AppConfig, request: PipelineRequest, duration: Optional[float]
) -> PipelineResult:
    async with build_http_client(config) as http_client:
        handler = build_pipeline_handler(config, http_client)
        async with build_recording_session(config) as session:
            await session.request_start()
            if duration is None:
                console.print("[bold green]Recording...[/bold green] press Enter to stop.")
            else:
                console.print(f"[bold green]Recording for {duration:g}s...[/bold green]")
            await _wait_for_stop(duration)
            artifact = await session.request_stop()

        result = await handler.process(artifact, request)
        await handler.drain()
        return result


def _print_result(result: PipelineResult) -> None:
    lines = [f"[bold]Heard[/bold] ({result.transcription.provider}): {result.transcription.text}"]
    if result.translation is not None:
        detected = result.translation.detected_language or "?"
        lines.append(f"[bold]Translation[/bold] (from {detected}): {result.translation.translated_text}")
    if result.reply is not None:
        source = result.reply.source_model or "fallback message"
        lines.append(f"[bold]Reply[/bold] ({source}): {result.reply.text}")
    console.print(Panel("\n".join(lines), title="Voice relay"))


def _fail(error: VoiceRelayError) -> None:
    console.print(f"[red]{error.user_message}[/red]")
    console.print(f"[dim]{error}[/dim]")
    raise typer.Exit(code=1)


@app.command()
def record(
    mode: PipelineMode = typer.Option(
        PipelineMode.TRANSLATE,
        "--mode",
        help="Translate the speech or answer it with the chatbot.",
    ),
    to_language: str = typer.Option("en", "--to", help="Target language code."),
    from_language: str = typer.Option("auto", "--from", help="Source language code or 'auto'."),
    duration: Optional[float] = typer.Option(
        None,
        "--duration",
        min=0.5,
        help="Stop after this many seconds instead of waiting for Enter.",
    ),
    chat_mode: ChatMode = typer.Option(
        ChatMode.ASK_ME_ANYTHING,
        "--chat-mode",
        help="Chatbot persona used in chat mode.",
    ),
    speak: bool = typer.Option(True, "--speak/--no-speak", help="Read the result aloud."),
) -> None:
    """Record from the microphone and run the full pipeline."""
    config = load_config()
    request = PipelineRequest(
        mode=mode,
        target_language=to_language,
        source_language=from_language,
        chat_mode=chat_mode,
        speak=speak,
    )
    try:
        result = asyncio.run(_record_and_process(config, request, duration))
    except VoiceRelayError as e:
        _fail(e)
    _print_result(result)


@app.command()
def translate(
    texts: List[str] = typer.Argument(..., help="Text to translate; several are sent as one batch."),
    to_language: str = typer.Option(..., "--to", help="Target language code."),
    from_language: str = typer.Option("auto", "--from", help="Source language code or 'auto'."),
    speak: bool = typer.Option(False, "--speak/--no-speak", help="Read the translation aloud."),
) -> None:
    """Translate text through the relay."""
    config = load_config()

    async def _run():
        async with build_http_client(config) as http_client:
            relay = build_translation_relay(config, http_client)
            if len(texts) == 1:
                responses = [
                    await relay.translate(
                        TranslationRequest(
                            source_text=texts[0],
                            target_language=to_language,
                            source_language=from_language,
                        )
                    )
                ]
            else:
                responses = await relay.translate_batch(
                    BatchTranslationRequest(
                        source_texts=tuple(texts),
                        target_language=to_language,
                        source_language=from_language,
                    )
                )
            if speak:
                dispatcher = build_speech_dispatcher(config)
                for response in responses:
                    if response.translated_text:
                        dispatcher.speak(response.translated_text, to_language)
                await dispatcher.drain()
            return responses

    try:
        responses = asyncio.run(_run())
    except VoiceRelayError as e:
        _fail(e)
    for response in responses:
        console.print(response.translated_text or "")


@app.command()
def chat(
    message: str = typer.Argument(..., help="Message for the chatbot."),
    model: Optional[List[str]] = typer.Option(
        None,
        "--model",
        help="Model to try, in order. Repeat to build a fallback chain.",
    ),
    mode: ChatMode = typer.Option(ChatMode.ASK_ME_ANYTHING, "--mode", help="Chatbot persona."),
) -> None:
    """Ask the chatbot through the model fallback chain."""
    config = load_config()
    if model:
        model_identifiers = [m.strip() for m in model]
        if not all(model_identifiers):
            raise typer.BadParameter("model identifiers must not be blank", param_hint="--model")
        chain = FallbackChain.of(*model_identifiers)
    else:
        chain = build_chat_chain(config)

    async def _run():
        async with build_http_client(config) as http_client:
            return await build_fallback_chain(config, http_client).get_reply(message, chain, mode)

    reply = asyncio.run(_run())
    style = "yellow" if reply.exhausted else "cyan"
    console.print(f"[{style}]{reply.text}[/{style}]")


if __name__ == "__main__":
    app()
