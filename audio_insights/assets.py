"""Static files offered for download to users who want to run offline.

None of this is executed by the app; it is served verbatim.
"""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class DeveloperAsset:
    label: str
    file_name: str
    content: str
    mime: str = "text/plain"


PYTHON_SCRIPT = '''"""Transcribe a recording locally with Whisper and summarize it with OpenAI."""

import os

import whisper
from dotenv import load_dotenv
from openai import OpenAI


SUMMARY_PROMPT = """You are a professional meeting assistant. Analyze the transcript you are given.

Please generate:
a) Executive Summary: A high-level overview of the discussion.
b) Action Items: List each task and its assignee (if mentioned).
c) Sentiment Analysis: Analyze the overall tone.

Return the result in clean Markdown format."""


def process_audio(file_path, output_filename="analysis_output.md"):
    print(f"--- Transcribing {file_path} locally using Whisper ---")
    model = whisper.load_model("base")
    transcription = model.transcribe(file_path)["text"]

    print("--- Summarizing with OpenAI ---")
    client = OpenAI(api_key=os.getenv("OPENAI_API_KEY"))
    response = client.chat.completions.create(
        model="gpt-4o-mini",
        messages=[
            {"role": "system", "content": SUMMARY_PROMPT},
            {"role": "user", "content": transcription},
        ],
    )
    summary = response.choices[0].message.content

    with open(output_filename, "w", encoding="utf-8") as f:
        f.write("# Audio Analysis Report\\n\\n")
        f.write(f"## Transcript\\n{transcription}\\n\\n")
        f.write(summary)

    print(f"--- Success! Analysis saved to {output_filename} ---")


if __name__ == "__main__":
    load_dotenv()
    path = input("Enter audio file path: ")
    process_audio(path)
'''

REQUIREMENTS_TXT = """openai-whisper
openai
python-dotenv
"""

README_MD = """# Audio Analysis Script

This script transcribes audio locally using OpenAI's Whisper and summarizes it with the OpenAI API.

## Setup

1. Install dependencies (Whisper also needs `ffmpeg` on your PATH):
   ```bash
   pip install -r requirements.txt
   ```

2. Set up your OpenAI API key:
   - Create a key at https://platform.openai.com/api-keys
   - Set it as an environment variable, or put it in a `.env` file:
     ```bash
     export OPENAI_API_KEY='your-api-key-here'
     ```

3. Run the script:
   ```bash
   python transcribe_summary.py
   ```
"""

DEVELOPER_ASSETS: List[DeveloperAsset] = [
    DeveloperAsset("Download script.py", "transcribe_summary.py", PYTHON_SCRIPT, "text/x-python"),
    DeveloperAsset("requirements.txt", "requirements.txt", REQUIREMENTS_TXT),
    DeveloperAsset("README.md", "README.md", README_MD, "text/markdown"),
]
