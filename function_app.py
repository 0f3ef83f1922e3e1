import logging

import azure.functions as func

from content_committer import ContentCommitter, Settings

app = func.FunctionApp()


def respond(committer: ContentCommitter, req: func.HttpRequest) -> func.HttpResponse:
    result = committer.handle(req.method, req.get_body())
    return func.HttpResponse(
        result.to_json(),
        status_code=result.status_code,
        mimetype="application/json",
    )


# No methods filter: non-POST requests must reach the handler and get a 405 body
@app.function_name(name="SaveContent")
@app.route(route="save-content", auth_level=func.AuthLevel.FUNCTION)
def save_content(req: func.HttpRequest) -> func.HttpResponse:
    logging.info("SaveContent triggered (%s)", req.method)
    return respond(ContentCommitter(Settings.from_env()), req)
