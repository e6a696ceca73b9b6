from docingest.summarization.base import BaseSummarizer
from docingest.summarization.factory import SummarizerFactory
from docingest.summarization.summarizer import Summarizer

__all__ = ["BaseSummarizer", "Summarizer", "SummarizerFactory"]
