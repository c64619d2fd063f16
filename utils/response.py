from flask import jsonify


def json_response(message="success", data=None, code=200):
    resp = jsonify({"code": code, "message": message, "data": data})
    resp.status_code = code
    return resp


def result_response(result, data=None, success_message="success"):
    """把存储层的 OperationResult 转成统一响应结构"""
    if result.aborted:
        return json_response(message="已取消", data=data)
    if not result.ok:
        return json_response(code=result.code, message=result.error, data=data)
    return json_response(message=success_message, data=data)
