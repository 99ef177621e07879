# Trident Shared Config
# Central configuration for all Trident services

import os

# Anthropic
ANTHROPIC_API_KEY = os.environ.get('ANTHROPIC_API_KEY')
ANTHROPIC_MODEL = os.environ.get('ANTHROPIC_MODEL', 'claude-sonnet-4-20250514')

# Sentiment classifier
SENTIMENT_TIMEOUT_SECONDS = float(os.environ.get('SENTIMENT_TIMEOUT_SECONDS', 30.0))
SENTIMENT_MAX_TOKENS = int(os.environ.get('SENTIMENT_MAX_TOKENS', 200))

# Analytics
TRENDS_DEFAULT_DAYS = int(os.environ.get('TRENDS_DEFAULT_DAYS', 30))
TRENDS_MAX_DAYS = int(os.environ.get('TRENDS_MAX_DAYS', 365))

# Logging
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

# Valid sentiment labels
SENTIMENTS = ['positive', 'negative', 'neutral']
