#!/usr/bin/env python3
"""
Simple script to run the toast demo with external access
Run this with: python run_app.py
"""

import os

if __name__ == "__main__":
    from app import app

    port = int(os.getenv('PORT', 5000))
    print("Starting toast demo...")
    print(f"Open http://localhost:{port}/ in your browser")
    print("Press Ctrl+C to stop the server")

    app.run(host='0.0.0.0', port=port, debug=True)
