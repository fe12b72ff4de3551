"""Article Console Application Entry Point.

Simple redirect to the console app.

Run with: streamlit run app.py
The CMS backend is external; point API_BASE_URL at it (see .env.example).
"""

from article_console.app import main

if __name__ == "__main__":
    main()
