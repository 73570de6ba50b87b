"""AudioInsights AI - Main entry point.

Run with ``streamlit run main.py``.
"""

import logging

from audio_insights.config import resolve_api_key
from audio_insights.inference import AudioAnalysisService
from audio_insights.streamlit_ui import create_streamlit_app


def main():
    """Launch the AudioInsights application."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    analysis_service = AudioAnalysisService()
    # OPENAI_API_KEY from the environment or a .env file
    api_key = resolve_api_key()
    if api_key:
        success, message = analysis_service.set_api_key(api_key)
        if not success:
            logging.getLogger(__name__).warning("Ignoring configured API key: %s", message)

    create_streamlit_app(analysis_service)


if __name__ == "__main__":
    main()
