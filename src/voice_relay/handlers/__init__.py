from voice_relay.handlers.voice_pipeline_handler import VoicePipelineHandler

__all__ = ["VoicePipelineHandler"]
