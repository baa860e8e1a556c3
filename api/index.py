from settleup.app import create_app

app = create_app()

# Vercel ignores this block, but it's useful for local testing
if __name__ == '__main__':
    app.run(debug=app.config['DEBUG'], port=app.config['PORT'])
