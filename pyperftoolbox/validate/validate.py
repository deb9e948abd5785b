from pyperftoolbox.classes import class_dic, label_dic

def _resolve(method, variable):
    """ Resolve a selector given as enum member, name, integer code or display label """
    enum_cls = class_dic[method]
    if isinstance(variable, enum_cls):
        return variable
    if isinstance(variable, str):
        key = variable.strip().upper().replace('–', '-').replace('—', '-')
        for candidate in (key, key.replace(' ', '_').replace('-', '_')):
            if candidate in enum_cls.__members__:
                return enum_cls[candidate]
        if key in label_dic.get(method, {}):
            return label_dic[method][key]
        for member in enum_cls:
            if isinstance(member.value, str) and member.value.upper() == key:
                return member
    elif isinstance(variable, int) and not isinstance(variable, bool):
        try:
            return enum_cls(variable)
        except ValueError:
            pass
    raise ValueError(
        f"An incorrect {method} was specified: {variable!r}. "
        f"Choose from {[m.name for m in enum_cls]}"
    )

def validate_methods(names, variables):
    variables = [_resolve(method, variables[m]) for m, method in enumerate(names)]
    if len(variables) == 1:
        return variables[0]
    else:
        return variables
