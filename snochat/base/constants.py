""" All Application Constants declare here... """

# Python Packages
from decouple import config


# App Constants
APP_ENV                         =   config('APP_ENV', default = 'development')
APP_SECRET_KEY                  =   config('APP_SECRET_KEY', default = 'change-me')
APP_LOG_LEVEL                   =   config('APP_LOG_LEVEL', default = 'INFO')


# Swagger Constants
SWAGGER_APP_PROPS       =   {
                                "name": "SnoChat",
                                "version": "1.0",
                                "description": "Credit-gated AI chat: sessions, \
                                message history, image analysis and per-exchange \
                                credit accounting."
                            }


# Database Constants
DB_HOST                         =   config('DB_HOST', default = 'localhost')
DB_PORT                         =   config('DB_PORT', default = '5432')
DB_NAME                         =   config('DB_NAME', default = 'snochat')
DB_USER                         =   config('DB_USER', default = 'snochat')
DB_PASSWORD                     =   config('DB_PASSWORD', default = '')

# Full URI override (e.g. sqlite:///snochat.db for local runs and tests)
DATABASE_URL                    =   config('DATABASE_URL', default = '')


# AWS Constants
AWS_ACCESS_KEY_ID		        =	config('AWS_ACCESS_KEY_ID', default = None)
AWS_SECRET_ACCESS_KEY	        =	config('AWS_SECRET_ACCESS_KEY', default = None)
AWS_REGION				        =	config('AWS_REGION', default = 'us-east-1')
AWS_S3_BUCKET_NAME	            =	config('AWS_S3_BUCKET_NAME', default = 'snochat')


# AI Provider
AI_PROVIDER                     =   config('AI_PROVIDER', default = 'anthropic')


# Anthropic Constants
ANTHROPIC_API_KEY               =   config('ANTHROPIC_API_KEY', default = '')
ANTHROPIC_DEFAULT_MODEL         =   config('ANTHROPIC_DEFAULT_MODEL', default = 'claude-3-5-haiku-latest')


# OpenAI Constants
OPENAI_API_KEY		            =	config('OPENAI_API_KEY', default = '')
OPENAI_DEFAULT_MODEL            =   config('OPENAI_DEFAULT_MODEL', default = 'gpt-4o-mini')
